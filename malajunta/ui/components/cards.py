"""Card-style components for posts, comments and characters."""
from __future__ import annotations

from typing import Any, Callable

from markupsafe import Markup, escape

from .. import presentation
from . import buttons

Translate = Callable[..., str]


def avatar(url: str | None, name: str | None, email: str | None = None, *, size: str = "h-10 w-10") -> Markup:
    if url:
        return Markup(
            f"<img src=\"{escape(url)}\" alt=\"{escape(name or '')}\" class=\"{size} rounded-full border border-slate-700/60 object-cover\">"
        )
    return Markup(
        f"<span class=\"{size} inline-flex items-center justify-center rounded-full bg-amber-600 text-sm font-bold text-white\">"
        f"{escape(presentation.initials(name, email))}</span>"
    )


def post_card(post: dict[str, Any], *, t: Translate, can_delete: bool = False, can_like: bool = False) -> Markup:
    """Return a feed card for a row of ``media_posts_with_stats``."""

    post_id = str(post["id"])
    author = post.get("author_name") or t("common.anonymous")
    description = post.get("description") or ""
    like_label = f"{post.get('like_count') or 0}"
    like_icon = "♥" if post.get("liked") else "♡"
    like_control = (
        buttons.action(like_label, url=f"/media/{post_id}/like", fields={"next": "/media"}, icon=like_icon)
        if can_like
        else Markup(f"<span class=\"text-sm text-slate-400\">{like_icon} {escape(like_label)}</span>")
    )
    delete_control = (
        buttons.action(t("posts.delete"), url=f"/media/{post_id}/delete", danger=True) if can_delete else Markup("")
    )
    description_block = (
        f"<p class=\"mt-3 whitespace-pre-line text-sm text-slate-200\">{escape(description)}</p>" if description else ""
    )
    return Markup(
        f"""
        <article class=\"rounded-3xl bg-slate-900/70 p-5 shadow-lg shadow-black/20\" data-post-id=\"{escape(post_id)}\">
            <header class=\"flex items-center gap-3\">
                {avatar(post.get("author_avatar"), author)}
                <div class=\"flex-1\">
                    <p class=\"text-sm font-semibold text-white\">{escape(author)}</p>
                    <p class=\"text-xs text-slate-400\">{escape(presentation.relative_post_date(post.get("created_at")))}</p>
                </div>
                {delete_control}
            </header>
            <a href=\"/media/{escape(post_id)}\"><img src=\"{escape(post.get("image_url") or "")}\" alt=\"\" class=\"mt-4 w-full rounded-2xl object-cover\" loading=\"lazy\"></a>
            {description_block}
            <footer class=\"mt-4 flex flex-wrap items-center gap-3 text-sm text-slate-400\">
                {like_control}
                <a href=\"/media/{escape(post_id)}\" class=\"inline-flex items-center gap-2\">💬 <span>{post.get("comment_count") or 0}</span></a>
                <a href=\"/media/{escape(post_id)}/download\" class=\"inline-flex items-center gap-2\">⬇ <span>{escape(t("posts.download"))}</span></a>
            </footer>
        </article>
        """
    )


def comment_item(comment: dict[str, Any], *, t: Translate, can_delete: bool = False, can_like: bool = False) -> Markup:
    comment_id = str(comment["id"])
    post_id = str(comment.get("post_id") or "")
    author = comment.get("author_name") or t("common.anonymous")
    like_icon = "♥" if comment.get("liked") else "♡"
    count = comment.get("like_count") or 0
    like_control = (
        buttons.action(str(count), url=f"/media/{post_id}/comments/{comment_id}/like", icon=like_icon)
        if can_like
        else Markup(f"<span class=\"text-xs text-slate-400\">{like_icon} {count}</span>")
    )
    delete_control = (
        buttons.action(t("comments.delete"), url=f"/media/{post_id}/comments/{comment_id}/delete", danger=True)
        if can_delete
        else Markup("")
    )
    return Markup(
        f"""
        <li class=\"flex gap-3 rounded-2xl bg-slate-900/60 p-4\" data-comment-id=\"{escape(comment_id)}\">
            {avatar(comment.get("author_avatar"), author, size="h-8 w-8")}
            <div class=\"flex-1\">
                <p class=\"text-sm\"><span class=\"font-semibold text-white\">{escape(author)}</span>
                <span class=\"ml-2 text-xs text-slate-400\">{escape(presentation.compact_comment_date(comment.get("created_at")))}</span></p>
                <p class=\"mt-1 whitespace-pre-line text-sm text-slate-200\">{escape(comment.get("content") or "")}</p>
                <div class=\"mt-2 flex gap-2\">{like_control}{delete_control}</div>
            </div>
        </li>
        """
    )


def character_card(character: dict[str, Any], *, t: Translate, subclasses: tuple[str, ...], editable: bool = False) -> Markup:
    character_id = str(character["id"])
    if not editable:
        controls = ""
    else:
        options = "".join(
            f"<option value=\"{escape(option)}\"{' selected' if option == character.get('subclass') else ''}>{escape(option)}</option>"
            for option in subclasses
        )
        controls = f"""
            <form method=\"post\" action=\"/profile/characters/{escape(character_id)}\" class=\"mt-3 flex flex-wrap gap-2\">
                <input name=\"name\" value=\"{escape(character.get("name") or "")}\" class=\"rounded-xl bg-slate-800 px-3 py-1 text-sm text-white\" required>
                <select name=\"subclass\" class=\"rounded-xl bg-slate-800 px-3 py-1 text-sm text-white\">{options}</select>
                <button type=\"submit\" class=\"rounded-full border border-slate-600/40 px-3 py-1 text-xs text-slate-100\">{escape(t("characters.save"))}</button>
            </form>
            {buttons.action(t("characters.delete"), url=f"/profile/characters/{character_id}/delete", danger=True)}
        """
    return Markup(
        f"""
        <li class=\"rounded-2xl bg-slate-900/70 p-4\" data-character-id=\"{escape(character_id)}\">
            <p class=\"text-base font-semibold text-white\">{escape(character.get("name") or "")}</p>
            <p class=\"text-xs uppercase tracking-wide text-amber-300\">{escape(character.get("subclass") or "")}</p>
            {controls}
        </li>
        """
    )


def tag_chip(tag: dict[str, Any]) -> Markup:
    linked = tag.get("characters") if isinstance(tag.get("characters"), dict) else {}
    name = linked.get("name") or tag.get("character_name") or ""
    subclass = linked.get("subclass")
    suffix = f" · {escape(subclass)}" if subclass else ""
    return Markup(f"<span class=\"rounded-full bg-slate-800/70 px-3 py-1 text-xs text-slate-200\">@{escape(name)}{suffix}</span>")


__all__ = ["avatar", "post_card", "comment_item", "character_card", "tag_chip"]
