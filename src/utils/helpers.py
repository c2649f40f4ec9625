"""
Fonctions utilitaires partagees dans le projet TeleStock.

Ce module centralise les fonctions reutilisees a travers le codebase :
- parse_size : conversion "2G", "500M", "1.5G" -> octets
- format_size : affichage lisible d'une taille en octets
"""

import re
from typing import Union

# Multiplicateurs binaires acceptes par parse_size
_SIZE_UNITS: dict[str, int] = {
    "": 1,
    "B": 1,
    "K": 1024,
    "KB": 1024,
    "M": 1024**2,
    "MB": 1024**2,
    "G": 1024**3,
    "GB": 1024**3,
    "T": 1024**4,
    "TB": 1024**4,
}

_SIZE_PATTERN = re.compile(r"^([0-9]*\.?[0-9]+)\s*([A-Z]*)$")


def parse_size(value: Union[str, int, float]) -> int:
    """
    Convertit une taille lisible en nombre d'octets.

    Accepte un entier (deja en octets) ou une chaine avec unite optionnelle :
    "2G", "500M", "1.5G", "1024", "10 KB". Les unites sont binaires
    (K = 1024). La casse est ignoree.

    Args:
        value: Taille a convertir

    Returns:
        Taille en octets

    Raises:
        ValueError: Si la chaine est vide, sans valeur numerique
            ou avec une unite inconnue.
    """
    if isinstance(value, bool):
        raise ValueError(f"Taille invalide: {value!r}")
    if isinstance(value, (int, float)):
        return int(value)

    text = value.strip().upper()
    if not text:
        raise ValueError("Taille vide")

    match = _SIZE_PATTERN.match(text)
    if match is None:
        raise ValueError(f"Taille invalide: {value!r}")

    number, unit = match.groups()
    if unit not in _SIZE_UNITS:
        raise ValueError(
            f"Unite inconnue: {unit} (utiliser B, K/KB, M/MB, G/GB, T/TB)"
        )

    return int(float(number) * _SIZE_UNITS[unit])


def format_size(size_bytes: int) -> str:
    """
    Formate une taille en octets pour l'affichage (unites decimales).

    Exemples: 512 -> "512 B", 1_500_000 -> "1.50 MB".
    """
    units = ["B", "KB", "MB", "GB", "TB"]
    value = float(size_bytes)
    index = 0
    while value >= 1000 and index < len(units) - 1:
        value /= 1000
        index += 1

    if index == 0:
        return f"{int(value)} {units[index]}"
    return f"{value:.2f} {units[index]}"

