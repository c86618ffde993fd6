from __future__ import annotations

STANDARD_PLACEHOLDERS = (
    "title",
    "student_name",
    "accomplishment",
    "school_name",
    "grade",
    "issued_date",
    "certificate_number",
    "signature_name",
    "signature_designation",
)

DEFAULT_TEMPLATES = (
    {
        "name": "Classic",
        "description": "Bordered certificate with a serif heading.",
        "is_default": True,
        "template_html": """<div class="certificate classic">
  <h1>{{ title }}</h1>
  <p>This is to certify that</p>
  <h2>{{ student_name }}</h2>
  <p>of grade {{ grade }}, {{ school_name }}</p>
  <p>{{ accomplishment }}</p>
  <footer>
    <span>Issued on {{ issued_date }}</span>
    <span>{{ signature_name }}, {{ signature_designation }}</span>
    <small>{{ certificate_number }}</small>
  </footer>
</div>""",
    },
    {
        "name": "Modern",
        "description": "Minimal layout with the certificate number on top.",
        "is_default": False,
        "template_html": """<div class="certificate modern">
  <small>{{ certificate_number }}</small>
  <h1>{{ title }}</h1>
  <h2>{{ student_name }}</h2>
  <p>{{ accomplishment }}</p>
  <p>{{ school_name }} &middot; Grade {{ grade }} &middot; {{ issued_date }}</p>
  <p>{{ signature_name }}<br>{{ signature_designation }}</p>
</div>""",
    },
    {
        "name": "Achievement",
        "description": "Award style for competitions and merit lists.",
        "is_default": False,
        "template_html": """<div class="certificate achievement">
  <h1>Certificate of Achievement</h1>
  <h3>{{ title }}</h3>
  <p>Awarded to <strong>{{ student_name }}</strong> (Grade {{ grade }}, {{ school_name }})</p>
  <p>for {{ accomplishment }}</p>
  <p>Date: {{ issued_date }}</p>
  <p>{{ signature_name }} &mdash; {{ signature_designation }}</p>
  <small>Certificate No. {{ certificate_number }}</small>
</div>""",
    },
)
