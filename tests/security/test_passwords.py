from src.employee_directory.employee_directory.security.passwords import PasswordHasher


def test_same_password_hashes_differently_but_both_verify():
    hasher = PasswordHasher()

    first = hasher.hash("hunter22")
    second = hasher.hash("hunter22")

    assert first != second
    assert hasher.verify("hunter22", first)
    assert hasher.verify("hunter22", second)


def test_wrong_password_returns_false():
    hasher = PasswordHasher()

    assert hasher.verify("nope", hasher.hash("hunter22")) is False


def test_corrupted_digest_returns_false_instead_of_raising():
    hasher = PasswordHasher()

    assert hasher.verify("hunter22", "CHANGE_ME") is False
    assert hasher.verify("hunter22", "") is False
