"""
larasanic-api
API scaffolding for Sanic + Tortoise ORM applications: policy and
repository generators plus a generic filtering/pagination repository
"""

__version__ = '1.0.0'
