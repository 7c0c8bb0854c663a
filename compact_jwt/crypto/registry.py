"""Closed mapping from algorithm name to signature family and digest."""

from compact_jwt.core.errors import AlgorithmError
from compact_jwt.crypto.hmac_backend import HMACBackend
from compact_jwt.crypto.pem_backend import PEMBackend
from compact_jwt.crypto.types import Algorithm, AlgorithmSpec, SignatureFamily

_FAMILY_BY_PREFIX = {
    "HS": SignatureFamily.HMAC,
    "RS": SignatureFamily.RSA,
    "ES": SignatureFamily.EC,
}


def _build_registry() -> dict[str, AlgorithmSpec]:
    registry: dict[str, AlgorithmSpec] = {}
    for alg in Algorithm:
        if alg is Algorithm.NONE:
            registry[alg.value] = AlgorithmSpec(name=alg, family=SignatureFamily.NONE)
            continue
        registry[alg.value] = AlgorithmSpec(
            name=alg,
            family=_FAMILY_BY_PREFIX[alg.value[:2]],
            digest_bits=int(alg.value[2:]),
        )
    return registry


_REGISTRY = _build_registry()

SUPPORTED_ALGORITHMS: frozenset[str] = frozenset(_REGISTRY)

_HMAC_BACKEND = HMACBackend()
_PEM_BACKEND = PEMBackend()


def resolve_algorithm(name: object) -> AlgorithmSpec:
    """Look up an algorithm by its exact (case-sensitive) name."""
    spec = _REGISTRY.get(name) if isinstance(name, str) else None
    if spec is None:
        raise AlgorithmError(f"unsupported algorithm: {name!r}")
    return spec


def backend_for(spec: AlgorithmSpec) -> HMACBackend | PEMBackend | None:
    """Return the backend that signs for ``spec``; ``None`` for ``none``."""
    match spec.family:
        case SignatureFamily.HMAC:
            return _HMAC_BACKEND
        case SignatureFamily.RSA | SignatureFamily.EC:
            return _PEM_BACKEND
        case SignatureFamily.NONE:
            return None
    raise AlgorithmError(f"no backend for {spec.name}")
