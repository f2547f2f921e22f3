import pytest
from nacl.signing import SigningKey

from shasper.casper import (
    AttestCall,
    Attestation,
    CasperError,
    CasperEvent,
    CasperState,
    Checkpoint,
    SlashCall,
    TRANSACTION_LONGEVITY_MAX,
)

H0 = b"\x00" * 31 + b"\xaa"
H10 = b"\x10" * 32
H20 = b"\x20" * 32
H30 = b"\x30" * 32


def make_signer(n):
    return SigningKey(bytes([n]) * 32)


def vid_of(signer):
    return bytes(signer.verify_key)


def sign(signer, attestation):
    return signer.sign(attestation.encode()).signature


def make_state(signers, **kwargs):
    return CasperState(
        validators=[(vid_of(s), 1) for s in signers],
        block_hashes={0: H0, 10: H10, 20: H20, 30: H30},
        **kwargs,
    )


def test_attestation_encode_layout():
    signer = make_signer(1)
    a = Attestation(vid_of(signer), Checkpoint(1, H10), Checkpoint(2, H20))
    encoded = a.encode()
    assert len(encoded) == 32 + 40 + 40
    assert encoded[:32] == vid_of(signer)
    assert encoded[32:40] == (1).to_bytes(8, "little")
    assert encoded[40:72] == H10
    assert encoded[72:80] == (2).to_bytes(8, "little")
    assert encoded[80:] == H20


def test_attest_previous_epoch():
    signer = make_signer(1)
    state = make_state([signer])
    a = Attestation(vid_of(signer), Checkpoint(0, H0), Checkpoint(0, H0))
    state.attest(a, sign(signer, a))
    assert state.previous_epoch_attestations == [a]
    assert state.previous_epoch_attestations_count == 1
    assert state.current_epoch_attestations == []
    assert state.events == [(CasperEvent.ON_NEW_PREVIOUS_EPOCH_ATTESTATION, a)]


def test_attest_rejects_unknown_validator():
    signer = make_signer(1)
    outsider = make_signer(2)
    state = make_state([signer])
    a = Attestation(vid_of(outsider), Checkpoint(0, H0), Checkpoint(0, H0))
    with pytest.raises(CasperError, match="not in session"):
        state.attest(a, sign(outsider, a))


def test_attest_rejects_bad_signature():
    signer = make_signer(1)
    other = make_signer(2)
    state = make_state([signer])
    a = Attestation(vid_of(signer), Checkpoint(0, H0), Checkpoint(0, H0))
    with pytest.raises(CasperError, match="invalid attestation signature"):
        state.attest(a, sign(other, a))


def test_attest_rejects_wrong_target():
    signer = make_signer(1)
    state = make_state([signer])
    a = Attestation(vid_of(signer), Checkpoint(0, H0), Checkpoint(5, H0))
    with pytest.raises(CasperError, match="source or target"):
        state.attest(a, sign(signer, a))
    assert state.events == []


def test_slash_double_vote_calls_hook():
    slashed = []
    signer = make_signer(1)
    state = make_state([signer], on_slashing=slashed.append)
    a1 = Attestation(vid_of(signer), Checkpoint(0, H0), Checkpoint(1, H10))
    a2 = Attestation(vid_of(signer), Checkpoint(0, H0), Checkpoint(1, H20))
    state.slash(a1, sign(signer, a1), a2, sign(signer, a2))
    assert slashed == [vid_of(signer)]


def test_slash_surround_vote_calls_hook():
    slashed = []
    signer = make_signer(1)
    state = make_state([signer], on_slashing=slashed.append)
    a1 = Attestation(vid_of(signer), Checkpoint(0, H0), Checkpoint(3, H30))
    a2 = Attestation(vid_of(signer), Checkpoint(1, H10), Checkpoint(2, H20))
    state.slash(a1, sign(signer, a1), a2, sign(signer, a2))
    assert slashed == [vid_of(signer)]


def test_slash_same_attestation_rejected():
    signer = make_signer(1)
    state = make_state([signer])
    a = Attestation(vid_of(signer), Checkpoint(0, H0), Checkpoint(1, H10))
    with pytest.raises(CasperError, match="same attestation"):
        state.slash(a, sign(signer, a), a, sign(signer, a))


def test_slash_bad_second_signature_rejected():
    signer = make_signer(1)
    state = make_state([signer])
    a1 = Attestation(vid_of(signer), Checkpoint(0, H0), Checkpoint(1, H10))
    a2 = Attestation(vid_of(signer), Checkpoint(0, H0), Checkpoint(1, H20))
    with pytest.raises(CasperError, match="attestation 2's signature"):
        state.slash(a1, sign(signer, a1), a2, sign(signer, a1))


def test_slash_different_validators_rejected():
    s1, s2 = make_signer(1), make_signer(2)
    state = make_state([s1, s2])
    a1 = Attestation(vid_of(s1), Checkpoint(0, H0), Checkpoint(1, H10))
    a2 = Attestation(vid_of(s2), Checkpoint(0, H0), Checkpoint(1, H10))
    with pytest.raises(CasperError, match="same validator"):
        state.slash(a1, sign(s1, a1), a2, sign(s2, a2))


def test_slash_non_conflicting_rejected():
    slashed = []
    signer = make_signer(1)
    state = make_state([signer], on_slashing=slashed.append)
    a1 = Attestation(vid_of(signer), Checkpoint(0, H0), Checkpoint(1, H10))
    a2 = Attestation(vid_of(signer), Checkpoint(1, H10), Checkpoint(2, H20))
    with pytest.raises(CasperError, match="slashing conditions"):
        state.slash(a1, sign(signer, a1), a2, sign(signer, a2))
    assert slashed == []


def test_new_session_advances_epoch_and_justifies():
    signer = make_signer(1)
    state = make_state([signer])
    a = Attestation(vid_of(signer), Checkpoint(0, H0), Checkpoint(0, H0))
    state.attest(a, sign(signer, a))
    state.on_new_session(False, [], 10)
    assert state.current_epoch == 1
    assert state.current_epoch_number == 10
    assert state.previous_epoch == 0
    assert state.justification_bits[1] is True
    assert state.previous_epoch_attestations == []
    assert state.current_justified_block() == H0


def test_sessions_reach_finality():
    signer = make_signer(1)
    state = make_state([signer])

    def attest_current():
        a = Attestation(
            vid_of(signer),
            Checkpoint(state.current_justified_epoch, state.current_justified_block()),
            Checkpoint(state.current_epoch, state.block_hash(state.current_epoch_number)),
        )
        state.attest(a, sign(signer, a))

    attest_current()
    state.on_new_session(False, [], 10)
    attest_current()
    state.on_new_session(False, [], 20)
    assert state.current_justified_block() == H10
    attest_current()
    state.on_new_session(False, [], 30)
    assert state.current_justified_block() == H20
    assert state.previous_justified_block() == H10
    assert state.finalized_block() == H10


def test_no_attestations_no_justification():
    signer = make_signer(1)
    state = make_state([signer])
    state.on_new_session(False, [], 10)
    assert state.justification_bits == [False] * 4
    assert state.current_justified_block() == H0


def test_new_session_replaces_validators_when_changed():
    s1, s2 = make_signer(1), make_signer(2)
    state = make_state([s1])
    state.on_new_session(True, [vid_of(s2)], 10)
    assert state.validators == [(vid_of(s2), 1)]


def test_on_disabled_zeroes_weight():
    s1, s2 = make_signer(1), make_signer(2)
    state = make_state([s1, s2])
    state.on_disabled(1)
    assert state.validators == [(vid_of(s1), 1), (vid_of(s2), 0)]
    with pytest.raises(IndexError):
        state.on_disabled(5)


def test_offchain_attestations_are_accepted():
    s1, s2, s3 = make_signer(1), make_signer(2), make_signer(3)
    state = make_state([s1, s2])
    state.on_new_session(False, [], 10)
    calls = state.offchain_attestations(11, [s2, s3])
    assert [c.attestation.validator_id for c in calls] == [vid_of(s2)]
    for call in calls:
        state.attest(call.attestation, call.signature)
    assert state.current_epoch_attestations == [calls[0].attestation]


def test_offchain_attestations_only_after_epoch_start():
    signer = make_signer(1)
    state = make_state([signer])
    state.on_new_session(False, [], 10)
    assert state.offchain_attestations(12, [signer]) == []


def test_validate_unsigned():
    signer = make_signer(1)
    state = make_state([signer])
    a1 = Attestation(vid_of(signer), Checkpoint(0, H0), Checkpoint(1, H10))
    a2 = Attestation(vid_of(signer), Checkpoint(0, H0), Checkpoint(1, H20))
    tx = state.validate_unsigned(AttestCall(a1, sign(signer, a1)))
    assert tx.provides == [a1.encode()]
    assert tx.requires == []
    assert tx.longevity == TRANSACTION_LONGEVITY_MAX
    assert tx.propagate is True
    slash_tx = state.validate_unsigned(
        SlashCall(a1, sign(signer, a1), a2, sign(signer, a2))
    )
    assert slash_tx.provides == [a1.encode() + a2.encode()]
    with pytest.raises(CasperError):
        state.validate_unsigned("other")