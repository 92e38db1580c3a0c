"""Utilitaires partages du projet MediaMeta."""
