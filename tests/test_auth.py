import hashlib
import hmac

from fbgraph import auth


def test_appsecret_proof_is_hmac_sha256_hex():
    expected = hmac.new(b"secret", b"token", hashlib.sha256).hexdigest()
    assert auth.appsecret_proof("secret", "token") == expected


def test_appsecret_proof_known_value():
    # RFC 4231 test case 2
    proof = auth.appsecret_proof("Jefe", "what do ya want for nothing?")
    assert proof == "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"


def test_appsecret_proof_is_deterministic_and_lowercase():
    first = auth.appsecret_proof("secret", "token")
    assert first == auth.appsecret_proof("secret", "token")
    assert first == first.lower()
    assert len(first) == 64


def test_sign_params_appends_proof_last():
    params = [("fields", "id"), ("access_token", "token")]
    signed = auth.sign_params(params, "token", "secret")
    assert signed[:2] == params
    assert signed[-1] == ("appsecret_proof", auth.appsecret_proof("secret", "token"))


def test_sign_params_without_secret_never_signs(monkeypatch):
    def fail(*args):
        raise AssertionError("signer called without a secret")
    monkeypatch.setattr(auth, "appsecret_proof", fail)

    params = [("access_token", "token")]
    assert auth.sign_params(params, "token", None) == params
