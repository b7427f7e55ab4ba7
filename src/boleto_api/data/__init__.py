"""
Static demo data for the Boleto API.

This package contains fixture data used by DemoBoletoService for
development and testing without a database.

Modules:
- demo_boletos: Pre-populated Boleto objects
"""
