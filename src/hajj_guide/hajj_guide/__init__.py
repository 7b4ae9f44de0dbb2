"""Hajj Guide package.

Pilgrim records for the Hajj season, organized by feature modules (pilgrims,
medical, accommodations, transport, permits, admins) with gateway, service
and a thin Flask controller layer on top of a shared MySQL store.
"""
