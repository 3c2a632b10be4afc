"""Domain layer for forexledger application.

Services are imported from their modules (``forexledger.domain.book``,
``forexledger.domain.entry``) rather than re-exported here, because the
database layer imports the entity modules of this package.
"""
