"""Interface ligne de commande de MediaMeta (Typer + Rich)."""
