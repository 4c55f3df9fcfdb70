# product_api/__init__.py
