"""Accounts app for the Tibbna ERP backend.

This package holds the static administrative accounts, the signed
session cookie, the role/module access policy and the middleware that
gates every dashboard request, together with the login, logout and
session endpoints used by the front-end application.
"""
