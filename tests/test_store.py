from bloggerish.models import User
from bloggerish.store import BlogStore, InMemoryRepository


def test_seed_content():
    store = BlogStore()
    admin = store.get_user("Admin")
    assert admin.bio == "<b>Welcome to Bloggerish!</b> This is the admin account."

    posts = store.list_posts()
    assert len(posts) == 1
    assert posts[0].id == 1
    assert posts[0].title == "Welcome to Bloggerish!"
    assert [c.author for c in posts[0].comments] == ["Guest"]
    assert store.get_user("Guest") is not None


def test_create_post_sanitizes_and_numbers():
    store = BlogStore()
    post = store.create_post(
        title="Second",
        author="alice",
        content='<p onclick="evil()">Hi</p><script>alert(1)</script>',
    )
    assert post.id == 2
    assert post.content == "<p>Hi</p>&lt;script&gt;alert(1)&lt;/script&gt;"
    assert store.get_user("alice").bio == ""


def test_posts_listed_newest_first():
    store = BlogStore()
    store.create_post(title="Second", author="alice", content="two")
    store.create_post(title="Third", author="bob", content="three")
    assert [p.id for p in store.list_posts()] == [3, 2, 1]


def test_add_comment_uses_comment_policy():
    store = BlogStore()
    comment = store.add_comment(1, "bob", "<p><b>nice</b></p>")
    assert comment.id == 2
    # paragraphs are not part of the inline comment allow-list
    assert comment.content == "&lt;p&gt;<b>nice</b>&lt;/p&gt;"
    assert store.get_post(1).comments[-1] is comment
    assert store.get_user("bob") is not None


def test_add_comment_to_missing_post():
    store = BlogStore()
    assert store.add_comment(99, "bob", "hello") is None
    assert store.get_user("bob") is None


def test_update_bio():
    store = BlogStore()
    user = store.update_bio("Admin", '<a href="javascript:alert(1)">me</a>')
    assert user.bio == "<a>me</a>"
    assert store.get_user("Admin").bio == "<a>me</a>"


def test_update_bio_unknown_user():
    store = BlogStore()
    assert store.update_bio("nobody", "bio") is None


def test_ensure_user_is_idempotent():
    store = BlogStore()
    first = store.ensure_user("carol")
    second = store.ensure_user("carol")
    assert first is second
    assert len([u for u in store.list_users() if u.username == "carol"]) == 1


def test_search_posts_case_insensitive():
    store = BlogStore()
    store.create_post(title="Gardening", author="alice", content="Tomatoes in June")
    assert [p.title for p in store.search_posts("TOMATO")] == ["Gardening"]
    assert [p.id for p in store.search_posts("welcome")] == [1]
    assert store.search_posts("") == []


def test_reset_restores_seed():
    store = BlogStore()
    store.create_post(title="Second", author="alice", content="two")
    store.reset()
    assert [p.id for p in store.list_posts()] == [1]
    assert store.get_user("alice") is None
    assert store.create_post(title="Again", author="alice", content="x").id == 2


def test_in_memory_repository():
    repo = InMemoryRepository(key=lambda u: u.username)
    repo.upsert(User(username="a"))
    repo.upsert(User(username="b"))
    repo.upsert(User(username="a", bio="updated"))

    assert [u.username for u in repo.list()] == ["a", "b"]
    assert repo.get("a").bio == "updated"
    assert repo.get("missing") is None
