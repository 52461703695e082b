"""
Service layer: authentication, email delivery, uploads, the event relay and
background maintenance.
"""
