"""Factory Boy helpers wired to the user store of the app under test."""

from __future__ import annotations

import factory


class UserStoreRegistry:
    """Store the user store provided by the pytest fixture layer."""

    _store = None

    @classmethod
    def set(cls, store):
        """Register the store that ``create`` strategies persist into."""
        cls._store = store

    @classmethod
    def get(cls):
        """Return the registered user store.

        Raises
        ------
        RuntimeError
            If factories are used without the ``app`` fixture wiring.
        """
        if cls._store is None:
            raise RuntimeError("Factories store not set. Did you request the 'app' fixture?")
        return cls._store


class BaseFactory(factory.Factory):
    """Build plain domain objects; ``create`` also saves them to the store."""

    class Meta:
        abstract = True

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        obj = model_class(*args, **kwargs)
        UserStoreRegistry.get().save(obj)
        return obj
