"""Users app package.

Accounts, privilege roles, JWT login and the fixed bootstrap accounts.
"""
