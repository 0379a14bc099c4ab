"""
Storefront Checkout

Product catalog with perishable and shippable capabilities, carts,
customer accounts and the checkout pipeline.
"""
__version__ = "1.0.0"
