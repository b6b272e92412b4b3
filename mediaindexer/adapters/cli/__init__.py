"""Interface ligne de commande Typer."""
