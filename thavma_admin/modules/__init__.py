"""
Thavma Admin Modules
====================

Blueprint modules composed by ThavmaAdmin.
"""
