from hagwon.app.core.avatar import get_default_avatar, get_student_avatar


def test_default_avatar_is_deterministic():
    assert get_default_avatar("s1") == get_default_avatar("s1")
    assert get_default_avatar("s1") != get_default_avatar("s2")


def test_default_avatar_url_shape():
    url = get_default_avatar("s1")
    assert url == "https://api.dicebear.com/9.x/big-ears/svg?seed=s1&backgroundColor=b6e3f4,c0aede,d1d4f9"


def test_default_avatar_escapes_seed():
    url = get_default_avatar("김 민수/1")
    assert "seed=%EA%B9%80%20%EB%AF%BC%EC%88%98%2F1&" in url


def test_gender_does_not_change_url():
    assert get_default_avatar("s1", gender="female") == get_default_avatar("s1")


def test_student_avatar_prefers_uploaded_image():
    uploaded = "https://cdn.example.com/photo.png"
    assert get_student_avatar(uploaded, "id-1", "Kim") == uploaded


def test_student_avatar_falls_back_to_id_then_name():
    assert get_student_avatar(None, "id-1", "Kim") == get_default_avatar("id-1")
    assert get_student_avatar(None, None, "Kim") == get_default_avatar("Kim")
