"""
Plain-text views over a BlogState.

Navigator tracks which view is showing; the API client calls
Navigator.to_login() when the server answers 401.
"""
import textwrap


class Navigator:
    HOME = "home"
    LOGIN = "login"
    POST = "post"
    CATEGORIES = "categories"

    def __init__(self, view=HOME):
        self.current = view
        self.params = {}

    def go(self, view, **params):
        self.current = view
        self.params = params

    def to_login(self):
        self.go(self.LOGIN)


def render_status(state):
    who = state.user["username"] if state.user else "not logged in"
    parts = [f"[{who}]"]
    if state.loading:
        parts.append("loading...")
    if state.error:
        parts.append(f"error: {state.error}")
    return " ".join(parts)


def render_post_list(posts):
    if not posts:
        return "No posts yet."
    lines = []
    for post in posts:
        lines.append(f"#{post['id']} {post['title']}")
        lines.append(
            f"    by {post['author']['username']} in {post['category']['name']}"
            f" | {post['readTime']} min read | {post['views']} views"
        )
        lines.append(f"    {post['excerpt']}")
    return "\n".join(lines)


def render_post(post):
    tags = ", ".join(tag["name"] for tag in post["tags"]) or "none"
    header = [
        post["title"],
        "=" * len(post["title"]),
        f"by {post['author']['username']} | {post['category']['name']} | tags: {tags}",
        f"{post['readTime']} min read | {post['views']} views | {len(post['likes'])} likes",
        "",
    ]
    return "\n".join(header) + textwrap.fill(post["content"], width=78)


def render_categories(categories):
    if not categories:
        return "No categories."
    return "\n".join(
        f"{category['name']} ({category['slug']})"
        + (f" - {category['description']}" if category.get("description") else "")
        for category in categories
    )


def render_login():
    return "Please log in to continue."


def render(state, navigator):
    """Render the current view with a status line on top."""
    if navigator.current == Navigator.LOGIN:
        body = render_login()
    elif navigator.current == Navigator.POST:
        post_id = navigator.params.get("post_id")
        post = next((p for p in state.posts if p["id"] == post_id), None)
        body = render_post(post) if post else "Post not found."
    elif navigator.current == Navigator.CATEGORIES:
        body = render_categories(state.categories)
    else:
        body = render_post_list(state.posts)
    return f"{render_status(state)}\n\n{body}"
