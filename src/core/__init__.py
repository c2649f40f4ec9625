"""
Couche domaine (core).

Contient les entités métier, ports (interfaces abstraites), objets valeur
et exceptions. Cette couche n'a AUCUNE dépendance vers l'infrastructure
(adapters, frameworks, sous-processus, réseau).

Sous-packages :
- entities/ : Entités métier (SourceFile, DeliveryResult, ProgressState)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- value_objects/ : Objets valeur immutables (ParsedName, VideoProbe, AlbumRequest...)
- errors : Exceptions métier contenues au niveau du fichier
"""
