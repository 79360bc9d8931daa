"""Video lesson rendering."""

import html

from bootcamp.schemas import Lesson


def render_video(lesson: Lesson) -> str:
    """Render the lesson video as a responsive iframe with title and description."""
    title = html.escape(lesson.title)
    src = html.escape(lesson.video_url, quote=True)
    parts = [
        '<div class="video-wrapper" style="position:relative;padding-top:56.25%;">',
        f'<iframe src="{src}" title="{title}" '
        'style="position:absolute;top:0;left:0;width:100%;height:100%;border:0;" '
        'allow="accelerometer; autoplay; encrypted-media; picture-in-picture" '
        'allowfullscreen></iframe>',
        '</div>',
        f'<h2 class="lesson-title">{title}</h2>',
    ]
    if lesson.description:
        parts.append(f'<p class="lesson-description">{html.escape(lesson.description)}</p>')
    return ''.join(parts)
