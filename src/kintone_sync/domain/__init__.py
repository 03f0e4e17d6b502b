"""Reconciliation core: coercion, record mapping, upsert and batch driving."""
