"""Zinc-LHA: ключезависимая 512-битная функция перемешивания"""
from zinclha.hasher import zinc_digest, zinc_hash
from zinclha.profile import ALTERNATE, CANONICAL, VariantProfile, get_profile

__all__ = ["zinc_digest", "zinc_hash", "VariantProfile", "CANONICAL", "ALTERNATE", "get_profile"]
