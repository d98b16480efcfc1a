"""Domain layer for the Hearing Test API.

Plain records for users, tenants, groups, profiles, test paths and
hearing tests. This layer has no dependencies on infrastructure concerns.
"""
