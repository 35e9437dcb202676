PREVIEW_LENGTH = 200
REFERENCES_SHOWN = 2


def truncate(text, max_length=PREVIEW_LENGTH):
    if not text:
        return "No content available"
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def format_date(value):
    if not value:
        return "Unknown date"
    return f"{value:%b} {value.day}, {value.year}"


def word_count(text):
    return len(text.split(" ")) if text else 0


def register_template_filters(app):
    app.add_template_filter(truncate, "truncate_content")
    app.add_template_filter(format_date, "format_date")
    app.add_template_filter(word_count, "word_count")
    app.jinja_env.globals["REFERENCES_SHOWN"] = REFERENCES_SHOWN
