"""Markdown rendering for question text shown on the spectator screen."""

from __future__ import annotations

from dataclasses import dataclass, field
import html

from markdown_it import MarkdownIt

from gameshow_app.core.models import Question, QuestionType


@dataclass(slots=True)
class QuestionRenderer:
    """Converts question markdown (plus image and options) into HTML fragments."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_question(self, question: Question) -> str:
        """Render the question body followed by its image and answer choices."""
        parts = [self.render_fragment(question.text)]
        if question.image:
            parts.append(f'<img class="question-image" src="{html.escape(question.image, quote=True)}" alt="" />\n')
        if question.type is QuestionType.MULTIPLE_CHOICE and question.options:
            items = "".join(
                f"<li>{self._markdown.renderInline(option)}</li>" for option in question.options
            )
            parts.append(f'<ol class="question-options">{items}</ol>\n')
        elif question.type is QuestionType.TRUE_FALSE:
            parts.append('<ol class="question-options"><li>True</li><li>False</li></ol>\n')
        return "".join(parts)


# Shared instance; MarkdownIt renders are read-only so the HTTP threads can reuse it.
renderer = QuestionRenderer()
