"""Infrastructure layer: ORM models, database engine, schema graph, loaders.

This layer depends on stdlib, domain types, and third-party libs
(SQLAlchemy, NetworkX). It must never import from services, commands,
or output. The service layer bridges between domain and infrastructure.
"""
