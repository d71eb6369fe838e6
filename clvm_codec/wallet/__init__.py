from __future__ import annotations

from .proof import EveProof, LineageProof, Proof

__all__ = ["Proof", "LineageProof", "EveProof"]
