"""
Markdown converter for translated post bodies
"""
import html
import re
import unicodedata


def slugify(text: str) -> str:
    """Convert heading text to an anchor id."""
    s = re.sub(r'<[^>]+>', '', text)
    s = s.replace('`', '').replace('**', '').replace('*', '')
    s = unicodedata.normalize('NFD', s)
    s = ''.join(c for c in s if unicodedata.category(c) != 'Mn')
    s = s.lower()
    s = re.sub(r'[\s_]+', '-', s)
    s = re.sub(r'[^a-z0-9-]', '', s)
    s = re.sub(r'-{2,}', '-', s)
    s = s.strip('-')
    return s or 'section'


class ContentRenderer:
    """
    Convert the restricted markdown subset of translation payloads to markup

    This is a best-effort converter, not a markdown engine. Every rule is a
    single non-recursive pass, applied in order; anything it does not know
    passes through as literal text.
    """

    HEADING_PATTERNS = (
        (3, re.compile(r'^### (.*)$', re.MULTILINE)),
        (2, re.compile(r'^## (.*)$', re.MULTILINE)),
        (1, re.compile(r'^# (.*)$', re.MULTILINE)),
    )

    LIST_PATTERNS = (
        re.compile(r'^\* (.*)$', re.MULTILINE),
        re.compile(r'^- (.*)$', re.MULTILINE),
        re.compile(r'^\d+\. (.*)$', re.MULTILINE),
    )

    LINK_PATTERN = re.compile(r'\[([^\]]+)\]\(([^)]+)\)')

    # Bold before italic, otherwise the single-asterisk rule eats "**"
    BOLD_PATTERN = re.compile(r'\*\*(.*?)\*\*')
    ITALIC_PATTERN = re.compile(r'\*(.*?)\*')
    CODE_PATTERN = re.compile(r'`(.*?)`')

    PARAGRAPH_SPLIT = re.compile(r'\n{2,}')

    BLOCK_TAGS = (
        'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'li', 'ul', 'ol', 'p',
        'pre', 'blockquote', 'div', 'table', 'hr', 'figure',
    )
    BLOCK_START = re.compile(r'^<(?:%s)\b' % '|'.join(BLOCK_TAGS), re.IGNORECASE)

    def render(self, markdown: str) -> str:
        """
        Render markdown text

        Args:
            markdown: Raw translated content

        Returns:
            Markup ready to be inserted into the content container
        """
        text = markdown.strip().replace('\r\n', '\n')
        if not text:
            return ''

        text = self._headings(text)
        text = self._list_items(text)
        text = self.LINK_PATTERN.sub(self._link, text)
        text = self.BOLD_PATTERN.sub(r'<strong>\1</strong>', text)
        text = self.ITALIC_PATTERN.sub(r'<em>\1</em>', text)
        text = self.CODE_PATTERN.sub(r'<code>\1</code>', text)

        blocks = [b for b in self.PARAGRAPH_SPLIT.split(text) if b.strip()]
        return '\n'.join(self._block(b) for b in blocks)

    def _headings(self, text: str) -> str:
        for level, pattern in self.HEADING_PATTERNS:
            text = pattern.sub(lambda m, level=level: self._heading(level, m.group(1)), text)
        return text

    def _heading(self, level: int, title: str) -> str:
        title = title.strip()
        anchor = slugify(title)
        return (
            f'<h{level} id="{anchor}"><span class="me-2">{title}</span>'
            f'<a href="#{anchor}" class="anchor text-muted"><i class="fas fa-hashtag"></i></a>'
            f'</h{level}>'
        )

    def _list_items(self, text: str) -> str:
        for pattern in self.LIST_PATTERNS:
            text = pattern.sub(r'<li>\1</li>', text)
        return text

    def _link(self, match: re.Match) -> str:
        label, url = match.group(1), match.group(2).strip()
        return (
            f'<a href="{html.escape(url, quote=True)}" target="_blank" '
            f'rel="noopener noreferrer">{label}</a>'
        )

    def _block(self, block: str) -> str:
        """
        Render one blank-line separated block.

        Lines that already start with a block element stay as they are; runs
        of other lines become one paragraph with line breaks between them.
        """
        parts = []
        run = []

        def flush():
            if run:
                parts.append('<p>' + '<br>'.join(run) + '</p>')
                run.clear()

        for line in block.split('\n'):
            if not line.strip():
                continue
            if self.BLOCK_START.match(line.lstrip()):
                flush()
                parts.append(line.strip())
            else:
                run.append(line.strip())
        flush()

        return '\n'.join(parts)
