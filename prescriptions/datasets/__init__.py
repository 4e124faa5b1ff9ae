"""
Outils côté client pour préparer et envoyer des jeux de données à l'API :
aplatissement des arborescences de diagnostics, normalisation des catalogues
de produits, import par lots avec suivi de progression.
"""
