"""
Service layer abstraction.

Each service encapsulates the logic for a domain and works on the
repositories it is given, so the storage can be swapped without
touching the API handlers.
"""
