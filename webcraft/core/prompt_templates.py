"""Instruction templates sent to the generative model."""

from __future__ import annotations

WEBSITE_TEMPLATE = """
You are an expert web developer. Create a complete, modern, and responsive HTML website based on the following description: "{prompt}"

Requirements:
1. Generate a complete HTML document with DOCTYPE, head, and body
2. Include inline CSS for styling (no external stylesheets)
3. Make it responsive and mobile-friendly
4. Use modern CSS techniques (flexbox, grid where appropriate)
5. Include semantic HTML elements
6. Add some interactive elements if relevant (hover effects, etc.)
7. Use a professional color scheme and typography
8. Make it visually appealing and functional
9. Include placeholder content that matches the theme
10. Ensure good contrast and accessibility

Return ONLY the HTML code, no explanations or markdown formatting.
"""

MOCK_DOCUMENT = """```html
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{title}</title>
<style>
  body {{ margin: 0; font-family: system-ui, sans-serif; color: #1f2937; background: #f9fafb; }}
  header, main, footer {{ max-width: 960px; margin: 0 auto; padding: 2rem 1rem; }}
  .cards {{ display: grid; grid-template-columns: repeat(auto-fit, minmax(220px, 1fr)); gap: 1rem; }}
  .card {{ background: #fff; border-radius: 8px; padding: 1rem; transition: transform .2s; }}
  .card:hover {{ transform: translateY(-4px); }}
</style>
</head>
<body>
<header><h1>{title}</h1></header>
<main>
  <p>{description}</p>
  <section class="cards">
    <article class="card"><h2>About</h2><p>Placeholder content.</p></article>
    <article class="card"><h2>Contact</h2><p>Placeholder content.</p></article>
  </section>
</main>
<footer><small>Generated offline</small></footer>
</body>
</html>
```"""


def enrich(raw_prompt: str) -> str:
    """Embed the user's description verbatim into the website instruction."""
    return WEBSITE_TEMPLATE.format(prompt=raw_prompt)


__all__ = ["WEBSITE_TEMPLATE", "MOCK_DOCUMENT", "enrich"]
