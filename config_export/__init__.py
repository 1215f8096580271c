"""
Configuration Export App

Stores named configuration objects (e.g. ``system.site``,
``contact.settings``) and exposes them read-only over the API:
- GET /api/config-export/<config_name>
"""
