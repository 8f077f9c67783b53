"""
HTML clients for the storefront and transactional e-mails.

A page fragment is rendered by a tree of clients: each client adds its values
to the shared View, renders its sub-clients and places their output with its
own template. Decorators can be wrapped around every client by configuration.
"""
