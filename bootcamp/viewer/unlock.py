"""
Final code unlock screen.

The final code is derived from the instructor ID and a configured secret,
so the same instructor always gets the same code.
"""

import hashlib
import html


def generate_final_code(instructor: str, secret: str) -> str:
    """Get the 8-character completion code for an instructor."""
    digest = hashlib.sha256(f"{secret}:{instructor}".encode("utf-8")).hexdigest()
    return digest[:8].upper()


def verify_final_code(instructor: str, secret: str, code: str) -> bool:
    """Check a code typed by the student (case and surrounding spaces ignored)."""
    return code.strip().upper() == generate_final_code(instructor, secret)


def render_final_unlock(instructor_name: str, code: str) -> str:
    """Render the unlock banner with the final code."""
    return f"""
    <div class="final-unlock" style="text-align:center;padding:2em;background:#064e3b;border-radius:12px;">
        <div style="font-size:1.4em;color:#d1fae5;">Bootcamp complete with {html.escape(instructor_name)}!</div>
        <div style="color:#9ca3af;margin:0.5em 0;">Your final code</div>
        <div style="font-size:2.5em;font-weight:700;letter-spacing:0.2em;color:#34d399;">{html.escape(code)}</div>
    </div>
    """
