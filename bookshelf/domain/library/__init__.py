"""
Library bounded context: users and the books they reference.
"""
