"""
Futures contract specifications.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional


@dataclass(frozen=True)
class ContractSpec:
    """Futures contract specification."""
    symbol: str
    name: str
    exchange: str  # Display only
    tick_size: float
    tick_value: float  # $ per tick
    point_value: float  # $ per full point, the P&L multiplier
    initial_margin: float
    maintenance_margin: float

    def __repr__(self):
        return f"{self.symbol} ({self.name})"


# E-mini S&P 500
ES = ContractSpec(
    symbol="ES",
    name="E-mini S&P 500",
    exchange="CME",
    tick_size=0.25,
    tick_value=12.5,
    point_value=50.0,
    initial_margin=13200.0,
    maintenance_margin=12000.0
)

# Micro E-mini S&P 500
MES = ContractSpec(
    symbol="MES",
    name="Micro E-mini S&P 500",
    exchange="CME",
    tick_size=0.25,
    tick_value=1.25,
    point_value=5.0,
    initial_margin=1320.0,
    maintenance_margin=1200.0
)

# E-mini Nasdaq-100
NQ = ContractSpec(
    symbol="NQ",
    name="E-mini Nasdaq-100",
    exchange="CME",
    tick_size=0.25,
    tick_value=5.0,
    point_value=20.0,
    initial_margin=17600.0,
    maintenance_margin=16000.0
)

# Micro E-mini Nasdaq-100
MNQ = ContractSpec(
    symbol="MNQ",
    name="Micro E-mini Nasdaq-100",
    exchange="CME",
    tick_size=0.25,
    tick_value=0.5,
    point_value=2.0,
    initial_margin=1760.0,
    maintenance_margin=1600.0
)

# E-mini Russell 2000
RTY = ContractSpec(
    symbol="RTY",
    name="E-mini Russell 2000",
    exchange="CME",
    tick_size=0.1,
    tick_value=5.0,
    point_value=50.0,
    initial_margin=6820.0,
    maintenance_margin=6200.0
)

# E-mini Dow Jones
YM = ContractSpec(
    symbol="YM",
    name="E-mini Dow Jones",
    exchange="CBOT",
    tick_size=1.0,
    tick_value=5.0,
    point_value=5.0,
    initial_margin=8800.0,
    maintenance_margin=8000.0
)

# Crude Oil
CL = ContractSpec(
    symbol="CL",
    name="Crude Oil",
    exchange="NYMEX",
    tick_size=0.01,
    tick_value=10.0,
    point_value=1000.0,
    initial_margin=5060.0,
    maintenance_margin=4600.0
)

# Micro Crude Oil
MCL = ContractSpec(
    symbol="MCL",
    name="Micro Crude Oil",
    exchange="NYMEX",
    tick_size=0.01,
    tick_value=1.0,
    point_value=100.0,
    initial_margin=506.0,
    maintenance_margin=460.0
)

# Gold
GC = ContractSpec(
    symbol="GC",
    name="Gold",
    exchange="COMEX",
    tick_size=0.1,
    tick_value=10.0,
    point_value=100.0,
    initial_margin=10230.0,
    maintenance_margin=9300.0
)

# Micro Gold
MGC = ContractSpec(
    symbol="MGC",
    name="Micro Gold",
    exchange="COMEX",
    tick_size=0.1,
    tick_value=1.0,
    point_value=10.0,
    initial_margin=1023.0,
    maintenance_margin=930.0
)

# Euro FX
E6 = ContractSpec(
    symbol="6E",
    name="Euro FX",
    exchange="CME",
    tick_size=0.00005,
    tick_value=6.25,
    point_value=125000.0,
    initial_margin=2310.0,
    maintenance_margin=2100.0
)

# Natural Gas
NG = ContractSpec(
    symbol="NG",
    name="Natural Gas",
    exchange="NYMEX",
    tick_size=0.001,
    tick_value=10.0,
    point_value=10000.0,
    initial_margin=3080.0,
    maintenance_margin=2800.0
)

# 10-Year T-Note
ZN = ContractSpec(
    symbol="ZN",
    name="10-Year T-Note",
    exchange="CBOT",
    tick_size=0.015625,  # 1/64
    tick_value=15.625,
    point_value=1000.0,
    initial_margin=1650.0,
    maintenance_margin=1500.0
)

# 30-Year T-Bond
ZB = ContractSpec(
    symbol="ZB",
    name="30-Year T-Bond",
    exchange="CBOT",
    tick_size=0.03125,  # 1/32
    tick_value=31.25,
    point_value=1000.0,
    initial_margin=3850.0,
    maintenance_margin=3500.0
)

# Contract registry (read-only view)
CONTRACTS: Mapping[str, ContractSpec] = MappingProxyType({
    spec.symbol: spec
    for spec in (ES, MES, NQ, MNQ, RTY, YM, CL, MCL, GC, MGC, E6, NG, ZN, ZB)
})

# Longest first so "MGC" wins over "GC" when matching broker codes
_SYMBOLS_BY_LENGTH = sorted(CONTRACTS, key=len, reverse=True)


def lookup_contract(symbol: str) -> Optional[ContractSpec]:
    """Get contract specification by symbol, or None if not catalogued."""
    return CONTRACTS.get(symbol.upper())


def get_contract_specs(symbol: str) -> Optional[ContractSpec]:
    """Contract specs for display next to a symbol field."""
    return lookup_contract(symbol)


def get_contract(symbol: str) -> ContractSpec:
    """Get contract specification by symbol, raising for unknown symbols."""
    contract = lookup_contract(symbol)
    if contract is None:
        raise ValueError(f"Unknown contract symbol: {symbol.upper()}. Available: {available_symbols()}")
    return contract


def available_symbols() -> List[str]:
    """Sorted list of catalogued symbols."""
    return sorted(CONTRACTS)


def normalize_symbol(raw_symbol: str) -> str:
    """
    Map a broker contract code to its registry symbol.

    Broker exports carry fully qualified codes like ``F.US.MGCZ25``; the
    month/year suffix is dropped by matching the last part against the
    registry. Anything else is returned unchanged.
    """
    parts = raw_symbol.split(".")
    if len(parts) >= 3:
        contract = parts[-1].upper()
        for symbol in _SYMBOLS_BY_LENGTH:
            if contract.startswith(symbol):
                return symbol
    return raw_symbol
