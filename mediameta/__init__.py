"""
MediaMeta - Agregation de metadonnees films et series.

Ce package interroge des catalogues de metadonnees externes (TMDB), normalise
les resultats dans un modele interne unique et complete les textes manquants
ou non traduits en reinterrogeant le catalogue dans une langue de repli.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur)
- services/ : Couche application (agregation, reconciliation de langue)
- adapters/ : Couche infrastructure (CLI, clients API)
"""
