"""Users app package.

Hotel accounts (guests, managers, administrators), JWT authentication
endpoints and the capability table every other app authorizes against.
"""
