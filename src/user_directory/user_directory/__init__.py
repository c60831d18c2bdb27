"""User Directory service package.

Feature modules (users) sit on a thin Flask controller layer over service and
repository layers; core/ holds the error taxonomy and database/ the MySQL pool.
"""
