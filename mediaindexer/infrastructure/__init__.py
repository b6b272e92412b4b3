"""
Couche infrastructure de Media Indexer.

Contient les implementations concretes des ports du domaine :

- persistence/ : Stockage SQLite avec SQLModel (modeles, migrations, repository)
"""
