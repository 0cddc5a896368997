"""Request schemas — validation happens before any domain operation runs."""

import pytest
from pydantic import ValidationError

from beesides.schemas.collections import CollectionCreate
from beesides.schemas.profiles import ProfileCreate, ProfileUpdate
from beesides.schemas.ratings import RatingUpsert
from beesides.schemas.reviews import ReviewUpsert


def test_rating_accepts_camel_and_snake_case():
    assert RatingUpsert(releaseId="r1", score=7).release_id == "r1"
    assert RatingUpsert(release_id="r1", score=7).release_id == "r1"


@pytest.mark.parametrize("score", [0, 10, 5.5])
def test_rating_bounds_are_inclusive(score):
    assert RatingUpsert(releaseId="r1", score=score).score == score


@pytest.mark.parametrize("score", [-1, 11, 10.01])
def test_rating_out_of_range_rejected(score):
    with pytest.raises(ValidationError, match="Score must be a number between 0 and 10"):
        RatingUpsert(releaseId="r1", score=score)


def test_rating_rejects_unknown_fields():
    with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
        RatingUpsert(releaseId="r1", score=5, userId="someone-else")


def test_review_content_minimum_counts_trimmed_text():
    with pytest.raises(ValidationError, match="at least 10 characters"):
        ReviewUpsert(releaseId="r1", content="   short    ")
    review = ReviewUpsert(releaseId="r1", content="  long enough text  ")
    assert review.content == "long enough text"
    assert review.is_published is True


def test_review_blank_title_becomes_none():
    assert ReviewUpsert(releaseId="r1", content="x" * 10, title="   ").title is None


@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
def test_collection_blank_name_rejected(name):
    with pytest.raises(ValidationError, match="Collection name is required"):
        CollectionCreate(name=name)


def test_collection_name_is_trimmed():
    body = CollectionCreate(name="  Desert island  ", isPublic=False)
    assert body.name == "Desert island"
    assert body.is_public is False


def test_profile_update_only_sent_fields():
    body = ProfileUpdate(bio="Hi", avatar_url=None)
    assert body.changes() == {"bio": "Hi", "avatar_url": None}


def test_profile_update_rejects_non_allow_listed_fields():
    with pytest.raises(ValidationError):
        ProfileUpdate(bio="Hi", is_admin=True)


def test_profile_update_requires_a_field():
    with pytest.raises(ValidationError, match="No profile fields to update"):
        ProfileUpdate()


@pytest.mark.parametrize("username", ["ab", "has space", "x" * 31, "dash-name"])
def test_profile_create_username_pattern(username):
    with pytest.raises(ValidationError):
        ProfileCreate(username=username)


@pytest.mark.parametrize("score", [True, False, "7", "7.5"])
def test_rating_score_must_be_a_json_number(score):
    with pytest.raises(ValidationError, match="Score must be a number between 0 and 10"):
        RatingUpsert(releaseId="r1", score=score)


def test_rating_integer_score_is_accepted():
    assert RatingUpsert(releaseId="r1", score=8).score == 8.0
