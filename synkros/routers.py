from .source import SOURCE_ALIAS


class CatalogRouter:
    """Keep the read-only catalog database out of migrations."""

    def allow_migrate(self, db, app_label, model_name=None, **hints):
        if db == SOURCE_ALIAS:
            return False
        return None
