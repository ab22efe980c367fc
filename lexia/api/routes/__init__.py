# lexia/api/routes/__init__.py
"""HTTP route modules."""
