from app.mappers.page_metadata import MAX_TEXT_LENGTH, extract_metadata, to_business_profile


def _html(head: str = "", body: str = "") -> str:
    return f"<html><head>{head}</head><body>{body}</body></html>"


# --- title / description / text ---


def test_title_trimmed():
    meta = extract_metadata(_html(head="<title>  Acme Corp | Home \n</title>"))
    assert meta.title == "Acme Corp | Home"


def test_missing_title_is_none():
    assert extract_metadata(_html(body="<p>hi</p>")).title is None


def test_meta_description_case_insensitive():
    meta = extract_metadata(_html(head='<META NAME="Description" CONTENT=" We make widgets. ">'))
    assert meta.description == "We make widgets."


def test_missing_description_is_none():
    assert extract_metadata(_html()).description is None


def test_text_strips_script_style_and_tags():
    meta = extract_metadata(_html(
        head="<style>body { color: red; }</style>",
        body="<h1>Welcome</h1>\n\n<script>var x = 1;</script><p>to   <b>Acme</b></p>",
    ))
    assert meta.text == "Welcome to Acme"


def test_text_truncated():
    meta = extract_metadata(_html(body="<p>" + "a" * (MAX_TEXT_LENGTH + 500) + "</p>"))
    assert len(meta.text) == MAX_TEXT_LENGTH


def test_empty_document_never_fails():
    meta = extract_metadata("")
    assert meta.title is None
    assert meta.text == ""
    assert meta.email is None
    assert meta.phone is None
    assert meta.social_links.linkedin is None


# --- social links ---


def test_linkedin_company_normalized():
    meta = extract_metadata(_html(body='<a href="https://www.linkedin.com/company/acme">in</a>'))
    assert meta.social_links.linkedin == "https://linkedin.com/company/acme"


def test_linkedin_personal_profile_mapped_to_company_path():
    meta = extract_metadata(_html(body='<a href="https://linkedin.com/in/jane-doe">in</a>'))
    assert meta.social_links.linkedin == "https://linkedin.com/company/jane-doe"


def test_twitter_facebook_instagram():
    meta = extract_metadata(_html(body=(
        '<a href="https://twitter.com/acme">t</a>'
        '<a href="http://www.facebook.com/acmeinc">f</a>'
        '<a href="https://WWW.Instagram.com/acme.co">i</a>'
    )))
    assert meta.social_links.twitter == "https://twitter.com/acme"
    assert meta.social_links.facebook == "https://facebook.com/acmeinc"
    assert meta.social_links.instagram == "https://instagram.com/acme.co"


def test_first_match_per_platform_wins():
    meta = extract_metadata(_html(body=(
        '<a href="https://twitter.com/first">a</a><a href="https://twitter.com/second">b</a>'
    )))
    assert meta.social_links.twitter == "https://twitter.com/first"


def test_youtube_handle():
    meta = extract_metadata(_html(body='<a href="https://www.youtube.com/@acmecorp">yt</a>'))
    assert meta.social_links.youtube == "https://youtube.com/@acmecorp"


def test_youtube_channel():
    meta = extract_metadata(_html(body='<a href="https://www.youtube.com/channel/UC123">yt</a>'))
    assert meta.social_links.youtube == "https://youtube.com/channel/UC123"


def test_youtube_handle_preferred_over_channel():
    meta = extract_metadata(_html(body=(
        '<a href="https://youtube.com/channel/UC123">old</a>'
        '<a href="https://youtube.com/@acmecorp">new</a>'
    )))
    assert meta.social_links.youtube == "https://youtube.com/@acmecorp"


def test_youtube_user_form_normalized_to_channel():
    meta = extract_metadata(_html(body='<a href="https://youtube.com/user/acmevideos">yt</a>'))
    assert meta.social_links.youtube == "https://youtube.com/channel/acmevideos"


def test_social_links_absent():
    links = extract_metadata(_html(body="<p>No socials</p>")).social_links
    assert links.model_dump() == {
        "linkedin": None, "twitter": None, "facebook": None, "instagram": None, "youtube": None,
    }


# --- email / phone ---


def test_email_found_in_attribute():
    meta = extract_metadata(_html(body='<a href="mailto:hello@acme.com">Mail us</a>'))
    assert meta.email == "hello@acme.com"


def test_phone_parenthesized_area_code():
    meta = extract_metadata(_html(body="<p>Call (415) 555-1234 today</p>"))
    assert meta.phone == "+1-415-555-1234"


def test_phone_with_country_code_and_dots():
    meta = extract_metadata(_html(body="<p>+1 415.555.1234</p>"))
    assert meta.phone == "+1-415-555-1234"


def test_lookups_are_independent():
    meta = extract_metadata(_html(
        head="<title>Acme</title>",
        body='<p>info@acme.com</p><p>415-555-1234</p><a href="https://twitter.com/acme">t</a>',
    ))
    assert meta.title == "Acme"
    assert meta.email == "info@acme.com"
    assert meta.phone == "+1-415-555-1234"
    assert meta.social_links.twitter == "https://twitter.com/acme"


# --- to_business_profile ---


def test_to_business_profile_maps_fields():
    meta = extract_metadata(_html(
        head='<title>Acme</title><meta name="description" content="Widgets">',
        body='<p>info@acme.com (415) 555-1234</p><a href="https://www.youtube.com/@acme">yt</a>',
    ))
    profile = to_business_profile(meta, "https://acme.com")

    assert profile.name == "Acme"
    assert profile.description == "Widgets"
    assert profile.website == "https://acme.com"
    assert profile.contact.email == "info@acme.com"
    assert profile.contact.phone == "+1-415-555-1234"
    assert profile.social_media.youtube == "https://youtube.com/@acme"
    assert profile.registration_number is None
    assert profile.extracted_at is not None
