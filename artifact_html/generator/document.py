"""Document shell: head, styles, header bar and the light/dark toggle.

Everything a rendered page has regardless of its body. The version label is
the only per-artifact text in the shell, and it appears only in the title
and the header badge.
"""

import html
import json

from artifact_html.schema.settings import ConverterSettings

_STYLE = """
        :root {
            --bg-color: #ffffff;
            --text-color: #333333;
            --label-color: #666666;
            --grid-color: #eeeeee;
            --panel-shadow: rgba(0, 0, 0, 0.1);
            --error-color: #c0392b;
        }

        body.dark {
            --bg-color: #1e1e1e;
            --text-color: #f0f0f0;
            --label-color: #bbbbbb;
            --grid-color: #333333;
            --panel-shadow: rgba(0, 0, 0, 0.4);
            --error-color: #ff6b6b;
        }

        body {
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif;
            line-height: 1.6;
            color: var(--text-color);
            background-color: var(--bg-color);
            transition: background-color 0.3s, color 0.3s;
            margin: 0;
            padding: 0;
        }

        .header {
            position: fixed;
            top: 0;
            left: 0;
            right: 0;
            background-color: var(--bg-color);
            box-shadow: 0 2px 5px var(--panel-shadow);
            padding: 15px 20px;
            display: flex;
            justify-content: space-between;
            align-items: center;
            z-index: 100;
        }

        .header h1 {
            margin: 0;
            font-size: 1.5rem;
        }

        .version {
            color: var(--label-color);
            font-size: 0.9em;
            margin-left: 10px;
        }

        .theme-toggle {
            display: flex;
            align-items: center;
        }

        .theme-toggle-label {
            margin-right: 8px;
            color: var(--label-color);
        }

        .switch {
            position: relative;
            display: inline-block;
            width: 50px;
            height: 24px;
        }

        .switch input {
            opacity: 0;
            width: 0;
            height: 0;
        }

        .slider {
            position: absolute;
            cursor: pointer;
            top: 0;
            left: 0;
            right: 0;
            bottom: 0;
            background-color: #ccc;
            transition: .4s;
            border-radius: 24px;
        }

        .slider:before {
            position: absolute;
            content: "";
            height: 16px;
            width: 16px;
            left: 4px;
            bottom: 4px;
            background-color: white;
            transition: .4s;
            border-radius: 50%;
        }

        input:checked + .slider {
            background-color: #6d28d9;
        }

        input:focus + .slider {
            box-shadow: 0 0 1px #6d28d9;
        }

        input:checked + .slider:before {
            transform: translateX(26px);
        }

        .container {
            max-width: 1200px;
            margin: 70px auto 20px;
            padding: 20px;
        }

        .svg-container,
        .chart-container,
        .render-error {
            max-width: 720px;
            margin: 20px auto;
            padding: 15px;
            border-radius: 8px;
            background-color: var(--bg-color);
            box-shadow: 0 1px 3px var(--panel-shadow);
            break-inside: avoid;
        }

        .chart-container {
            height: 400px;
            position: relative;
        }

        .chart-container h2 {
            margin-top: 0;
        }

        .render-error {
            color: var(--error-color);
        }

        .source {
            max-width: 720px;
            margin: 20px auto;
        }

        .source pre {
            white-space: pre-wrap;
            word-wrap: break-word;
        }

        @media print {
            .header {
                position: static;
                box-shadow: none;
                border-bottom: 1px solid #eee;
            }

            .theme-toggle,
            .source {
                display: none;
            }

            .container {
                margin-top: 20px;
            }

            .svg-container,
            .chart-container {
                box-shadow: none;
                border: 1px solid #eee;
            }
        }
"""

# Applies the stored choice, or the system preference when nothing is stored,
# and announces every change as a "themechange" event on document.
_THEME_SCRIPT = """
        const themeStorageKey = %(storage_key)s;
        const toggleSwitch = document.getElementById('theme-toggle');
        const prefersDark = window.matchMedia('(prefers-color-scheme: dark)').matches;
        const savedTheme = localStorage.getItem(themeStorageKey);

        function applyTheme(isDark) {
            document.body.classList.toggle('dark', isDark);
            toggleSwitch.checked = isDark;
            document.dispatchEvent(new CustomEvent('themechange', { detail: { dark: isDark } }));
        }

        applyTheme(savedTheme === 'dark' || (!savedTheme && prefersDark));

        toggleSwitch.addEventListener('change', function (e) {
            localStorage.setItem(themeStorageKey, e.target.checked ? 'dark' : 'light');
            applyTheme(e.target.checked);
        });
"""


def script_json(value) -> str:
    """JSON for embedding inside a <script> element."""
    return (
        json.dumps(value, ensure_ascii=False)
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )


def error_fragment(heading: str, message: str) -> str:
    """A visible panel reporting a failure in place of missing content."""
    return (
        '<div class="render-error">'
        f"<h2>{html.escape(heading)}</h2>"
        f"<pre>{html.escape(message)}</pre>"
        "</div>"
    )


def assemble_document(
    heading: str,
    version: str,
    body: str,
    settings: ConverterSettings,
    head_scripts: tuple[str, ...] = (),
    page_script: str = "",
) -> str:
    """Wrap a body in the page shell.

    Args:
        heading: Page heading, also used in the <title>.
        version: Artifact version label shown in the title and header.
        body: HTML placed inside the main container's parent.
        settings: Supplies the theme storage key.
        head_scripts: External script URLs loaded in <head>.
        page_script: JavaScript run after the theme toggle is wired up.
    """
    title = html.escape(f"{heading} ({version})")
    scripts = "".join(
        f'\n    <script src="{html.escape(url)}"></script>' for url in head_scripts
    )
    theme_script = _THEME_SCRIPT % {"storage_key": script_json(settings.theme_storage_key)}
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>{scripts}
    <style>{_STYLE}    </style>
</head>
<body>
    <div class="header">
        <div>
            <h1>{html.escape(heading)} <span class="version">{html.escape(version)}</span></h1>
        </div>
        <div class="theme-toggle">
            <span class="theme-toggle-label">Dark Mode</span>
            <label class="switch">
                <input type="checkbox" id="theme-toggle">
                <span class="slider"></span>
            </label>
        </div>
    </div>
{body}
    <script>{theme_script}{page_script}
    </script>
</body>
</html>
"""
