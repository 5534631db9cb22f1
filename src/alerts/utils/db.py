"""Schema setup for relational providers backing the Alerts domain.

The memory provider used in development and tests needs no schema; these
helpers only act on SQLite/PostgreSQL providers.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

_RELATIONAL_PROVIDERS = ("sqlite", "postgresql")


def _relational_providers(domain: Domain):
    return [
        provider for _, provider in domain.providers.items() if provider.conn_info["provider"] in _RELATIONAL_PROVIDERS
    ]


def setup_db(domain: Domain) -> int:
    """Create tables for every aggregate persisted in a relational provider.

    Returns the number of providers whose schema was created.
    """
    created = 0
    with domain.domain_context():
        for provider in _relational_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])

            # Touching the DAO registers the aggregate's model with SQLAlchemy
            for _, aggregate_record in domain.registry.aggregates.items():
                if aggregate_record.cls.meta_.provider == provider.name:
                    domain.repository_for(aggregate_record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)
            created += 1
    return created


def drop_db(domain: Domain) -> int:
    """Drop all tables owned by relational providers."""
    dropped = 0
    with domain.domain_context():
        for provider in _relational_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
            dropped += 1
    return dropped
