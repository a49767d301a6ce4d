"""
Pagar.me Client for Django

A client for the Pagar.me card payment API: card hash generation,
transaction lookups and postback verification.
"""

__version__ = "0.1.0"
