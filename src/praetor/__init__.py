"""Praetor API package.

Feature modules (users, clients, work_units, commerce, ldap, ...) each carry
a thin Flask controller on top of service and repository layers.
"""
