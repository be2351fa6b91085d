"""
Thavma Admin - Portfolio & Contact Admin Server
===============================================

A Flask backend for a portfolio website with:
- Admin login with signed bearer tokens
- Project records with image uploads
- Contact-form inbox with email replies

Usage:
    from thavma_admin import create_app

    app = create_app()
    app.run(port=app.config['PORT'])
"""

__version__ = '0.1.0'

from .app import ThavmaAdmin, create_app

__all__ = ['ThavmaAdmin', 'create_app']
