"""Form field components styled with Tailwind."""
from __future__ import annotations

from typing import Iterable

from markupsafe import Markup, escape


_INPUT_BASE = (
    "block w-full rounded-xl border border-slate-700/60 bg-slate-900/70 px-4 py-2.5 text-sm text-slate-100 "
    "placeholder:text-slate-500 focus:border-amber-500 focus:ring-2 focus:ring-amber-600 focus:ring-offset-0"
)


def text_input(
    name: str,
    *,
    label: str,
    value: str = "",
    placeholder: str = "",
    type_: str = "text",
    required: bool = True,
    maxlength: int | None = None,
    readonly: bool = False,
) -> Markup:
    extra = []
    if required:
        extra.append("required")
    if readonly:
        extra.append("readonly")
    if maxlength:
        extra.append(f'maxlength="{maxlength}"')
    return Markup(
        f"""
        <label class=\"flex flex-col gap-2 text-sm font-medium text-slate-200\" for=\"{name}\">
            <span>{escape(label)}</span>
            <input id=\"{name}\" name=\"{name}\" type=\"{type_}\" value=\"{escape(value)}\" placeholder=\"{escape(placeholder)}\" class=\"{_INPUT_BASE}\" {' '.join(extra)}>
        </label>
        """
    )


def password_input(name: str, *, label: str, placeholder: str = "", required: bool = True) -> Markup:
    return text_input(name, label=label, placeholder=placeholder, type_="password", required=required)


def textarea(
    name: str,
    *,
    label: str,
    placeholder: str = "",
    rows: int = 4,
    required: bool = False,
    maxlength: int | None = None,
) -> Markup:
    required_attr = "required" if required else ""
    maxlength_attr = f'maxlength="{maxlength}"' if maxlength else ""
    return Markup(
        f"""
        <label class=\"flex flex-col gap-2 text-sm font-medium text-slate-200\" for=\"{name}\">
            <span>{escape(label)}</span>
            <textarea id=\"{name}\" name=\"{name}\" rows=\"{rows}\" placeholder=\"{escape(placeholder)}\" class=\"{_INPUT_BASE} resize-none\" {required_attr} {maxlength_attr}></textarea>
        </label>
        """
    )


def file_input(name: str, *, label: str, accept: str = "image/*") -> Markup:
    return Markup(
        f"""
        <label class=\"flex flex-col gap-2 text-sm font-medium text-slate-200\" for=\"{name}\">
            <span>{escape(label)}</span>
            <input id=\"{name}\" name=\"{name}\" type=\"file\" accept=\"{accept}\" class=\"{_INPUT_BASE} file:mr-4 file:rounded-full file:border-0 file:bg-amber-500 file:px-4 file:py-2 file:text-sm file:font-semibold file:text-white hover:file:bg-amber-400\" required>
        </label>
        """
    )


def select(name: str, *, label: str, options: Iterable[str], selected: str | None = None, placeholder: str = "") -> Markup:
    rendered = [f"<option value=\"\">{escape(placeholder)}</option>"] if placeholder else []
    for option in options:
        state = " selected" if option == selected else ""
        rendered.append(f"<option value=\"{escape(option)}\"{state}>{escape(option)}</option>")
    return Markup(
        f"""
        <label class=\"flex flex-col gap-2 text-sm font-medium text-slate-200\" for=\"{name}\">
            <span>{escape(label)}</span>
            <select id=\"{name}\" name=\"{name}\" class=\"{_INPUT_BASE}\" required>{''.join(rendered)}</select>
        </label>
        """
    )


__all__ = ["text_input", "password_input", "textarea", "file_input", "select"]
