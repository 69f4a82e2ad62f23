"""Domain layer for cofi application.

Services are imported from their modules (e.g. ``cofi.domain.transaction``)
so that the database layer can import ``cofi.domain.entities`` without a
circular import.
"""
