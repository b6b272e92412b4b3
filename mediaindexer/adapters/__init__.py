"""
Couche adaptateurs.

Les adaptateurs implementent les ports definis dans core/ports/ et exposent
l'application au monde exterieur :

- cli/ : Interface ligne de commande (Typer + Rich)
- imaging/ : Rendu des vignettes (Pillow)

Chaque adaptateur depend de core/ mais core/ ne depend jamais des adaptateurs.
"""
