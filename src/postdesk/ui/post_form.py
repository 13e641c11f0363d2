"""
Post admin views - server-rendered HTML for the post form and the admin listing.

Key behaviors:
- Inputs are pre-filled from the loaded post, or from the submitted values
  after a failed submission
- Each required-field error is shown inline next to its field
- The slug is read-only once a post exists
- Buttons carry their in-flight label and the intents that disable them, and
  a small submit handler applies them while the request is pending
"""

from __future__ import annotations

import html
from collections.abc import Mapping
from urllib.parse import quote

from postdesk.components.posts import ButtonState, FormErrors, FormPendingState, pending_state
from postdesk.domain.entities import NEW_POST_SLUG, Post

# --- Classes ---

INPUT_CLASS = "w-full rounded border border-gray-500 px-2 py-1 text-lg"
ERROR_CLASS = "text-red-600"
SUBMIT_CLASS = (
    "rounded bg-blue-500 py-2 px-4 text-white hover:bg-blue-600 "
    "focus:bg-blue-400 disabled:bg-blue-300"
)
DELETE_CLASS = (
    "rounded bg-red-500 py-2 px-4 text-white hover:bg-red-600 "
    "focus:bg-red-400 disabled:bg-red-300"
)

# Disables and relabels the buttons for the intent that was clicked.
PENDING_SCRIPT = """<script>
document.querySelectorAll("form[data-post-form]").forEach(function (form) {
  form.addEventListener("submit", function (event) {
    var intent = event.submitter ? event.submitter.value : "";
    form.querySelectorAll("button[name=intent]").forEach(function (button) {
      var disabledFor = (button.dataset.disabledFor || "").split(" ");
      if (disabledFor.indexOf(intent) !== -1) {
        if (button.value === intent) { button.textContent = button.dataset.pendingLabel; }
        setTimeout(function () { button.disabled = true; }, 0);
      }
    });
  });
});
</script>"""


def _escape(text: str) -> str:
    return html.escape(text)


# --- Fragments ---


def _error(message: str | None) -> str:
    if not message:
        return ""
    return f'<em class="{ERROR_CLASS}">{_escape(message)}</em>'


def _button(button: ButtonState, css_class: str) -> str:
    disabled = " disabled" if button.disabled else ""
    return (
        f'<button type="submit" name="intent" value="{button.value}" '
        f'class="{css_class}" '
        f'data-pending-label="{_escape(button.pending_label)}" '
        f'data-disabled-for="{" ".join(button.disabled_for)}"{disabled}>'
        f"{_escape(button.label)}</button>"
    )


def render_page(title: str, body: str) -> str:
    """Wrap a body fragment in a complete HTML document."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>{_escape(title)}</title>
</head>
<body>
    <main class="mx-auto max-w-4xl">
    {body}
    </main>
</body>
</html>"""


def render_post_form(
    post: Post | None,
    *,
    errors: FormErrors | None = None,
    values: Mapping[str, str] | None = None,
    pending: FormPendingState | None = None,
) -> str:
    """
    Render the create/edit form for a post.

    Args:
        post: Loaded post, or None for the new-post form.
        errors: Required-field errors from the last submission.
        values: Submitted values to redisplay instead of the post's.
        pending: Button state; defaults to the idle state for ``post``.
    """
    errors = errors or FormErrors()
    state = pending or pending_state(post)
    if values is None:
        values = post.model_dump() if post else {}

    title = _escape(values.get("title", ""))
    slug = _escape(values.get("slug", ""))
    markdown = _escape(values.get("markdown", ""))

    if state.is_new_post:
        slug_attrs = f'class="{INPUT_CLASS}"'
    else:
        slug_attrs = f'class="{INPUT_CLASS} opacity-60" readonly'

    buttons = []
    if state.delete_button is not None:
        buttons.append(_button(state.delete_button, DELETE_CLASS))
    if state.submit_button is not None:
        buttons.append(_button(state.submit_button, SUBMIT_CLASS))
    button_html = "\n        ".join(buttons)

    return f"""<form method="post" data-post-form>
      <p>
        <label>
          Post Title: {_error(errors.title)}
          <input type="text" name="title" class="{INPUT_CLASS}" value="{title}" />
        </label>
      </p>
      <p>
        <label>
          Post Slug: {_error(errors.slug)}
          <input type="text" name="slug" {slug_attrs} value="{slug}" />
        </label>
      </p>
      <p>
        <label for="markdown">Markdown: {_error(errors.markdown)}</label>
        <br />
        <textarea id="markdown" rows="8" name="markdown" class="{INPUT_CLASS} font-mono">{markdown}</textarea>
      </p>
      <p class="flex justify-end gap-4">
        {button_html}
      </p>
    </form>
    {PENDING_SCRIPT}"""


def render_post_list(posts: list[Post], *, admin_path: str = "/posts/admin") -> str:
    """Render the admin listing: a create link and an edit link per post."""
    base = admin_path.rstrip("/")
    items = "\n".join(
        f'<li><a href="{base}/{_escape(quote(p.slug, safe=""))}" class="text-blue-600 underline">'
        f"{_escape(p.title)}</a></li>"
        for p in posts
    )
    if not items:
        items = "<li>No posts yet.</li>"
    return f"""<nav>
      <p><a href="{base}/{NEW_POST_SLUG}" class="text-blue-600 underline">Create a New Post</a></p>
      <ul>
        {items}
      </ul>
    </nav>"""
