from app.auth.identity import avatar_url, default_avatar_index, normalize_profile


def test_default_avatar_from_discriminator():
    ident = normalize_profile({"id": "123", "username": "ana", "discriminator": "0007", "avatar": None})
    assert default_avatar_index("0007") == 2
    assert ident.avatar_url == "https://cdn.discordapp.com/embed/avatars/2.png"
    assert ident.external_id == "123"
    assert ident.discriminator == "0007"
    assert ident.email is None


def test_animated_and_static_avatars():
    assert avatar_url("42", "a_abc", "0001") == "https://cdn.discordapp.com/avatars/42/a_abc.gif"
    assert avatar_url("42", "abc", "0001") == "https://cdn.discordapp.com/avatars/42/abc.png"


def test_missing_or_odd_discriminator_falls_back_to_zero():
    assert default_avatar_index(None) == 0
    assert default_avatar_index("") == 0
    assert default_avatar_index("0") == 0
    assert default_avatar_index("abcd") == 0
    assert default_avatar_index("9999") == 4


def test_normalize_is_deterministic():
    profile = {"id": 99, "username": "bo", "discriminator": "1234", "avatar": None, "email": "bo@example.com"}
    first = normalize_profile(profile)
    second = normalize_profile(dict(profile))
    assert first == second
    assert first.external_id == "99"
    assert first.email == "bo@example.com"
    assert first.avatar_url.endswith("/embed/avatars/4.png")


def test_empty_email_is_none():
    ident = normalize_profile({"id": "1", "username": "x", "discriminator": "0001", "avatar": "h", "email": ""})
    assert ident.email is None


def test_discriminator_reads_leading_digits():
    assert default_avatar_index("12ab") == 2
    assert default_avatar_index(" 7") == 2
    assert default_avatar_index("x12") == 0
