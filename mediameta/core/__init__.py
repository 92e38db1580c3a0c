"""
Couche domaine (core).

Contient les entités métier, ports (interfaces abstraites), et objets valeur.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, frameworks, HTTP).

Sous-packages :
- entities/ : Modele normalise (SearchResult, MediaMetadata et ses composants)
- ports/ : Interfaces abstraites (catalogue distant, fournisseur de metadonnees)
- value_objects/ : Objets valeur immutables (langues, types de media)
"""
