"""
Clients for services the cart depends on
"""
