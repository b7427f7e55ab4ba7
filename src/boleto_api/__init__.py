"""
Boleto API: a chat-bot backend for browsing boletos.

This package exposes a small HTTP API that lets a chat front-end drill
down from a CNPJ or nota fiscal search, to a month folder (pasta), to the
download link of a single boleto.

Subpackages:
- lib: Logging and database client factories
- models: Boleto/Pasta domain models and API results
- services: Data access layer (mysql, supabase and demo implementations)
- data: Static demo fixtures

Main entry points:
- app.main(): Start the development server
- app.create_app(): Build the Flask application (for WSGI deployment)
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
