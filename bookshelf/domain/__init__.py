"""
Domain layer package.

Pure business objects, port interfaces and errors.
No framework, database or HTTP imports allowed.
"""
