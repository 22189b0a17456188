"""Contract specifications."""

from .specs import (
    ContractSpec,
    CONTRACTS,
    lookup_contract,
    get_contract_specs,
    get_contract,
    available_symbols,
    normalize_symbol,
)

__all__ = [
    'ContractSpec',
    'CONTRACTS',
    'lookup_contract',
    'get_contract_specs',
    'get_contract',
    'available_symbols',
    'normalize_symbol',
]
