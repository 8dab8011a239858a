from datetime import datetime, timezone

import asyncpg
import pytest

from articles.repository import ArticlesRepository
from comments import service
from comments.repository import CommentsRepository
from core.errors import InvalidInput, NotFound

from conftest import fk_violation


def comment_row(**overrides):
    row = {
        "comment_id": 1,
        "article_id": 9,
        "author": "butter_bridge",
        "body": "Oh, I've got compassion running out of my nose, pal!",
        "votes": 16,
        "created_at": datetime(2020, 4, 6, 12, 17, tzinfo=timezone.utc),
    }
    row.update(overrides)
    return row


@pytest.mark.asyncio
async def test_fetch_comments_by_article_id(db):
    db.fetch_all.return_value = [comment_row(), comment_row(comment_id=17)]

    rows = await CommentsRepository(db).fetch_comments_by_article_id("9")

    assert [r["comment_id"] for r in rows] == [1, 17]
    assert db.fetch_all.await_args.args[1] == 9


@pytest.mark.asyncio
async def test_fetch_comments_for_article_without_comments(db):
    db.fetch_all.return_value = []
    assert await CommentsRepository(db).fetch_comments_by_article_id(2) == []


@pytest.mark.asyncio
async def test_fetch_comments_invalid_article_id(db):
    with pytest.raises(InvalidInput, match="Invalid article ID"):
        await CommentsRepository(db).fetch_comments_by_article_id("invalid_id")


@pytest.mark.asyncio
async def test_insert_comment(db):
    db.fetch_one.return_value = comment_row(comment_id=19, article_id=2, votes=0, body="test comment")

    comment = await CommentsRepository(db).insert_comment("2", author="butter_bridge", body="test comment")

    assert comment["votes"] == 0
    sql, *params = db.fetch_one.await_args.args
    assert "INSERT INTO comments" in sql
    assert params == [2, "butter_bridge", "test comment"]


@pytest.mark.asyncio
async def test_insert_comment_missing_fields_checked_before_store(db):
    with pytest.raises(InvalidInput, match="Missing data in request body"):
        await CommentsRepository(db).insert_comment(2, author=None, body=None)
    db.fetch_one.assert_not_awaited()


@pytest.mark.asyncio
async def test_insert_comment_invalid_article_id_checked_first(db):
    with pytest.raises(InvalidInput, match="Invalid article ID"):
        await CommentsRepository(db).insert_comment("invalid_id", author=None, body=None)


@pytest.mark.asyncio
@pytest.mark.parametrize("table, message", [("users", "Username not found"), ("articles", "Article ID not found")])
async def test_insert_comment_unknown_reference(db, table, message):
    db.fetch_one.side_effect = fk_violation(table)
    with pytest.raises(NotFound) as excinfo:
        await CommentsRepository(db).insert_comment(9999, author="nobody", body="hi")
    assert excinfo.value.message == message


@pytest.mark.asyncio
async def test_remove_comment(db):
    db.execute.return_value = 1
    assert await CommentsRepository(db).remove_comment("1") is None
    sql, ident = db.execute.await_args.args
    assert "DELETE FROM comments" in sql
    assert ident == 1


@pytest.mark.asyncio
async def test_remove_comment_not_found(db):
    db.execute.return_value = 0
    with pytest.raises(NotFound, match="Comment ID not found"):
        await CommentsRepository(db).remove_comment(9999)


@pytest.mark.asyncio
@pytest.mark.parametrize("comment_id", ["invalid-comment-id", "-1", 0, "2.5"])
async def test_remove_comment_invalid_id(db, comment_id):
    with pytest.raises(InvalidInput, match="Invalid comment ID"):
        await CommentsRepository(db).remove_comment(comment_id)
    db.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_comment_votes(db):
    db.fetch_one.return_value = comment_row(votes=6)

    comment = await CommentsRepository(db).update_comment_votes("1", -10)

    assert comment["votes"] == 6
    sql, ident, delta = db.fetch_one.await_args.args
    assert "SET votes = votes + $2" in sql
    assert (ident, delta) == (1, -10)


@pytest.mark.asyncio
async def test_update_comment_votes_errors(db):
    repo = CommentsRepository(db)
    with pytest.raises(InvalidInput, match="Missing inc_votes data in request body"):
        await repo.update_comment_votes(1, None)
    with pytest.raises(InvalidInput, match="Invalid inc_votes data in request body"):
        await repo.update_comment_votes(1, "invalid data")
    with pytest.raises(InvalidInput, match="Invalid comment ID"):
        await repo.update_comment_votes("invalid_id", 10)

    db.fetch_one.return_value = None
    with pytest.raises(NotFound, match="Comment ID not found"):
        await repo.update_comment_votes(999999, 10)


@pytest.mark.asyncio
async def test_comments_for_article_checks_article_first(db):
    db.fetch_one.return_value = None

    with pytest.raises(NotFound, match="Article ID not found"):
        await service.comments_for_article(
            9999,
            articles=ArticlesRepository(db),
            comments=CommentsRepository(db),
        )
    db.fetch_all.assert_not_awaited()


@pytest.mark.asyncio
async def test_comments_for_article_with_no_comments(db):
    db.fetch_one.return_value = {"article_id": 2, "comment_count": 0}
    db.fetch_all.return_value = []

    rows = await service.comments_for_article(
        "2",
        articles=ArticlesRepository(db),
        comments=CommentsRepository(db),
    )

    assert rows == []


@pytest.mark.asyncio
async def test_update_comment_votes_out_of_range(db):
    repo = CommentsRepository(db)
    with pytest.raises(InvalidInput, match="Invalid inc_votes data in request body"):
        await repo.update_comment_votes(1, 10**30)
    db.fetch_one.assert_not_awaited()

    db.fetch_one.side_effect = asyncpg.exceptions.NumericValueOutOfRangeError("integer out of range")
    with pytest.raises(InvalidInput, match="Invalid inc_votes data in request body"):
        await repo.update_comment_votes(1, -2_000_000_000)


@pytest.mark.asyncio
async def test_insert_comment_rejects_nul_in_body(db):
    with pytest.raises(InvalidInput, match="Missing data in request body"):
        await CommentsRepository(db).insert_comment(2, author="butter_bridge", body="hi\x00")
    db.fetch_one.assert_not_awaited()
