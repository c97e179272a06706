# Route modules: debtor status lookups and operational health checks.
