PREVIEW_STYLES = """
    :root {
      color-scheme: light;
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
    }
    body {
      margin: 0;
      padding: 24px;
      color: #0f172a;
      background-color: #f8fafc;
      font-size: 16px;
      line-height: 1.5;
    }
    h1, h2, h3, h4 {
      color: #0f172a;
      margin-top: 1.5em;
    }
    a {
      color: #0369a1;
    }
    ul, ol {
      padding-left: 1.5rem;
    }
    table {
      border-collapse: collapse;
    }
    table td, table th {
      border: 1px solid #cbd5f5;
      padding: 0.5rem;
    }
  """

# served with every preview so scripts and forms in the markup stay inert
PREVIEW_CSP = "sandbox"


def build_preview_document(markup: str) -> str:
    """Wrap generated markup, unchanged, in a standalone page."""
    return f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <style>{PREVIEW_STYLES}</style>
  </head>
  <body>
{markup}
  </body>
</html>"""
