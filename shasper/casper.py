"""Casper FFG finality gadget: attestations, justification, finalization and slashing."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from nacl.exceptions import CryptoError
from nacl.signing import SigningKey, VerifyKey

KEY_TYPE_ID = b"casp"
"""Key type identifier under which validator keys are stored."""

HASH_LENGTH = 32
ZERO_HASH = bytes(HASH_LENGTH)
TRANSACTION_LONGEVITY_MAX = (1 << 64) - 1


class CasperError(Exception):
    """A call was rejected by the Casper rules."""


@dataclass(frozen=True)
class Checkpoint:
    """An epoch together with the hash of the block that starts it."""

    epoch: int
    hash: bytes

    def encode(self) -> bytes:
        """Epoch as a little-endian u64 followed by the raw hash."""
        return self.epoch.to_bytes(8, "little") + bytes(self.hash)


@dataclass(frozen=True)
class Attestation:
    """A validator's vote linking a source checkpoint to a target checkpoint."""

    validator_id: bytes
    source: Checkpoint
    target: Checkpoint

    def encode(self) -> bytes:
        """The bytes a validator signs: id, then source, then target."""
        return bytes(self.validator_id) + self.source.encode() + self.target.encode()


class CasperEvent(Enum):
    """Kinds of events the Casper state records."""

    ON_JUSTIFIED = "on_justified"
    ON_FINALIZED = "on_finalized"
    ON_NEW_PREVIOUS_EPOCH_ATTESTATION = "on_new_previous_epoch_attestation"
    ON_NEW_CURRENT_EPOCH_ATTESTATION = "on_new_current_epoch_attestation"


@dataclass(frozen=True)
class AttestCall:
    """An unsigned call submitting one attestation."""

    attestation: Attestation
    signature: bytes


@dataclass(frozen=True)
class SlashCall:
    """An unsigned call reporting two conflicting attestations."""

    attestation_1: Attestation
    signature_1: bytes
    attestation_2: Attestation
    signature_2: bytes


@dataclass(frozen=True)
class ValidTransaction:
    """How the transaction pool should treat a valid unsigned call."""

    priority: int
    requires: list[bytes]
    provides: list[bytes]
    longevity: int
    propagate: bool


def _verify(validator_id: bytes, message: bytes, signature: bytes) -> bool:
    try:
        VerifyKey(bytes(validator_id)).verify(message, bytes(signature))
    except (CryptoError, ValueError, TypeError):
        return False
    return True


@dataclass
class CasperState:
    """Casper storage and the operations that change it.

    ``block_hashes`` maps block numbers to hashes; unknown numbers hash to
    all zeroes. ``on_slashing``, when given, is called with the id of a
    slashed validator.
    """

    validators: list[tuple[bytes, int]] = field(default_factory=list)
    block_hashes: dict[int, bytes] = field(default_factory=dict)
    on_slashing: Optional[Callable[[bytes], Any]] = field(default=None, compare=False)

    current_epoch: int = 0
    current_epoch_number: int = 0
    previous_epoch: int = 0
    previous_epoch_number: int = 0
    previous_justified_epoch: int = 0
    previous_justified_epoch_number: int = 0
    current_justified_epoch: int = 0
    current_justified_epoch_number: int = 0
    finalized_epoch: int = 0
    finalized_epoch_number: int = 0

    current_epoch_attestations: list[Attestation] = field(default_factory=list)
    previous_epoch_attestations: list[Attestation] = field(default_factory=list)
    justification_bits: list[bool] = field(default_factory=lambda: [False] * 4)
    events: list[tuple[CasperEvent, Any]] = field(default_factory=list)

    @property
    def current_epoch_attestations_count(self) -> int:
        return len(self.current_epoch_attestations)

    @property
    def previous_epoch_attestations_count(self) -> int:
        return len(self.previous_epoch_attestations)

    def block_hash(self, number: int) -> bytes:
        """Hash of the block at number, or the zero hash if unknown."""
        return self.block_hashes.get(number, ZERO_HASH)

    def slash(
        self,
        attestation_1: Attestation,
        signature_1: bytes,
        attestation_2: Attestation,
        signature_2: bytes,
    ) -> None:
        """Slash a validator that signed two attestations violating FFG rules."""
        if attestation_1 == attestation_2:
            raise CasperError("not slashable because it's the same attestation")
        if not _verify(attestation_1.validator_id, attestation_1.encode(), signature_1):
            raise CasperError("not slashable because attestation 1's signature is invalid")
        if not _verify(attestation_2.validator_id, attestation_2.encode(), signature_2):
            raise CasperError("not slashable because attestation 2's signature is invalid")
        if attestation_1.validator_id != attestation_2.validator_id:
            raise CasperError(
                "not slashable because attestation not signed by the same validator"
            )

        double_vote = attestation_1.target.epoch == attestation_2.target.epoch
        surround_vote = (
            attestation_1.source.epoch < attestation_2.source.epoch
            and attestation_2.target.epoch < attestation_1.target.epoch
        )
        if not (double_vote or surround_vote):
            raise CasperError(
                "not slashable because it does not satisfy FFG's slashing conditions"
            )

        if self.on_slashing is not None:
            self.on_slashing(attestation_1.validator_id)

    def attest(self, attestation: Attestation, signature: bytes) -> None:
        """Record an attestation for the previous or the current epoch."""
        validator_id = attestation.validator_id
        if not any(vid == validator_id for vid, _ in self.validators):
            raise CasperError("validator not in session")
        if not _verify(validator_id, attestation.encode(), signature):
            raise CasperError("invalid attestation signature")

        source, target = attestation.source, attestation.target
        if (
            source.epoch == self.previous_justified_epoch
            and source.hash == self.block_hash(self.previous_justified_epoch_number)
            and target.epoch == self.previous_epoch
            and target.hash == self.block_hash(self.previous_epoch_number)
        ):
            self.previous_epoch_attestations.append(attestation)
            self.events.append((CasperEvent.ON_NEW_PREVIOUS_EPOCH_ATTESTATION, attestation))
        elif (
            source.epoch == self.current_justified_epoch
            and source.hash == self.block_hash(self.current_justified_epoch_number)
            and target.epoch == self.current_epoch
            and target.hash == self.block_hash(self.current_epoch_number)
        ):
            self.current_epoch_attestations.append(attestation)
            self.events.append((CasperEvent.ON_NEW_CURRENT_EPOCH_ATTESTATION, attestation))
        else:
            raise CasperError("invalid attestation source or target")

    def _matching_balance(self, attestations: Iterable[Attestation]) -> int:
        weights = self.validators
        return sum(
            next((weight for vid, weight in weights if vid == a.validator_id), 0)
            for a in attestations
        )

    def on_new_session(
        self, changed: bool, new_validators: Iterable[bytes], block_number: int
    ) -> None:
        """Close the current epoch: justify, finalize and open the next epoch."""
        total_balance = sum(weight for _, weight in self.validators)
        previous_matching = self._matching_balance(self.previous_epoch_attestations)
        current_matching = self._matching_balance(self.current_epoch_attestations)

        old_bits = list(self.justification_bits)
        bits = [old_bits[0], *old_bits[0:3]]

        old_previous_justified = (
            self.previous_justified_epoch,
            self.previous_justified_epoch_number,
        )
        old_current_justified = (
            self.current_justified_epoch,
            self.current_justified_epoch_number,
        )
        self.previous_justified_epoch = self.current_justified_epoch
        self.previous_justified_epoch_number = self.current_justified_epoch_number

        if previous_matching * 3 >= total_balance * 2:
            self.current_justified_epoch = self.previous_epoch
            self.current_justified_epoch_number = self.previous_epoch_number
            bits[1] = True
        if current_matching * 3 >= total_balance * 2:
            self.current_justified_epoch = self.current_epoch
            self.current_justified_epoch_number = self.current_epoch_number
            bits[0] = True

        rules = [
            (bits[1:4], old_previous_justified, 3),
            (bits[1:3], old_previous_justified, 2),
            (bits[0:3], old_current_justified, 2),
            (bits[0:2], old_current_justified, 1),
        ]
        for window, (epoch, number), distance in rules:
            if all(window) and epoch + distance == self.current_epoch:
                self.finalized_epoch = epoch
                self.finalized_epoch_number = number

        self.justification_bits = bits
        self.previous_epoch_attestations = []
        self.current_epoch_attestations = []

        if changed:
            self.validators = [(bytes(vid), 1) for vid in new_validators]
        self.previous_epoch = self.current_epoch
        self.previous_epoch_number = self.current_epoch_number
        self.current_epoch += 1
        self.current_epoch_number = block_number

    def on_disabled(self, index: int) -> None:
        """Set the weight of the validator at index to zero."""
        vid, _ = self.validators[index]
        self.validators[index] = (vid, 0)

    def offchain_attestations(
        self, block_number: int, signing_keys: Iterable[SigningKey]
    ) -> list[AttestCall]:
        """Build signed attestations for the local keys that are validators.

        Attestations are only produced on the block right after the current
        epoch started; at any other block the result is empty.
        """
        if block_number != self.current_epoch_number + 1:
            return []

        local = {bytes(key.verify_key): key for key in signing_keys}
        calls = []
        for vid, _ in self.validators:
            key = local.get(bytes(vid))
            if key is None:
                continue
            attestation = Attestation(
                validator_id=bytes(vid),
                source=Checkpoint(
                    self.current_justified_epoch,
                    self.block_hash(self.current_justified_epoch_number),
                ),
                target=Checkpoint(
                    self.current_epoch,
                    self.block_hash(self.current_epoch_number),
                ),
            )
            signature = key.sign(attestation.encode()).signature
            calls.append(AttestCall(attestation, signature))
        return calls

    def validate_unsigned(self, call: Union[AttestCall, SlashCall, Any]) -> ValidTransaction:
        """Describe how an unsigned call enters the transaction pool."""
        if isinstance(call, AttestCall):
            provides = call.attestation.encode()
        elif isinstance(call, SlashCall):
            provides = call.attestation_1.encode() + call.attestation_2.encode()
        else:
            raise CasperError("bad proof")
        return ValidTransaction(
            priority=0,
            requires=[],
            provides=[provides],
            longevity=TRANSACTION_LONGEVITY_MAX,
            propagate=True,
        )

    def current_justified_block(self) -> bytes:
        """Hash of the current justified checkpoint block."""
        return self.block_hash(self.current_justified_epoch_number)

    def previous_justified_block(self) -> bytes:
        """Hash of the previous justified checkpoint block."""
        return self.block_hash(self.previous_justified_epoch_number)

    def finalized_block(self) -> bytes:
        """Hash of the finalized checkpoint block."""
        return self.block_hash(self.finalized_epoch_number)