"""Synchronise relational table rows into Kintone apps."""
