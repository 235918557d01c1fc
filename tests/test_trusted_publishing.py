from ghaudit.trusted_publishing import (
    KNOWN_PYTHON_TP_INDICES,
    pypi_publish_uses_manual_credentials,
    release_gem_uses_manual_credentials,
    rubygems_credential_uses_manual_credentials,
)


def test_pypi_no_password():
    assert pypi_publish_uses_manual_credentials({}) is False


def test_pypi_password_default_index():
    assert pypi_publish_uses_manual_credentials({"password": "password"}) is True


def test_pypi_password_known_indices():
    for url in KNOWN_PYTHON_TP_INDICES:
        assert pypi_publish_uses_manual_credentials(
            {"password": "password", "repository-url": url}
        ) is True
        assert pypi_publish_uses_manual_credentials(
            {"password": "password", "repository_url": url}
        ) is True


def test_pypi_password_third_party_index():
    with_ = {"password": "password", "repository-url": "https://pkgs.example.com/"}
    assert pypi_publish_uses_manual_credentials(with_) is False


def test_pypi_hyphenated_key_takes_precedence():
    with_ = {
        "password": "password",
        "repository-url": "https://pkgs.example.com/",
        "repository_url": KNOWN_PYTHON_TP_INDICES[0],
    }
    assert pypi_publish_uses_manual_credentials(with_) is False


def test_pypi_known_index_without_password():
    with_ = {"repository-url": KNOWN_PYTHON_TP_INDICES[1]}
    assert pypi_publish_uses_manual_credentials(with_) is False


def test_release_gem_default():
    assert release_gem_uses_manual_credentials({}) is False


def test_release_gem_true_values():
    assert release_gem_uses_manual_credentials({"setup-trusted-publisher": True}) is False
    assert release_gem_uses_manual_credentials({"setup-trusted-publisher": "true"}) is False


def test_release_gem_other_values():
    assert release_gem_uses_manual_credentials({"setup-trusted-publisher": False}) is True
    assert release_gem_uses_manual_credentials({"setup-trusted-publisher": "yes"}) is True


def test_rubygems_credential():
    assert rubygems_credential_uses_manual_credentials({"api-token": "token"}) is True
    assert rubygems_credential_uses_manual_credentials({}) is False