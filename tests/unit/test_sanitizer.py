import re

import pytest

from listing_core.security.exceptions import SecurityViolation
from listing_core.security.sanitizer import sanitize_plain_text, sanitize_rich_text, sanitize_filename


@pytest.mark.unit
class TestPlainTextSanitization:
    """Test that all markup is stripped from plain text fields."""

    def test_script_removed(self):
        """Test script content is removed."""
        result = sanitize_plain_text('<script>alert(1)</script>hello')
        assert '<' not in result
        assert '>' not in result
        assert 'alert' not in result
        assert result == 'hello'

    def test_xss_vectors(self):
        """Test common XSS vectors leave no markup."""
        xss_inputs = [
            "<img src=x onerror=alert('xss')>",
            "\"><script>alert('xss')</script>",
            "<iframe src='javascript:alert(1)'></iframe>",
            "<a href='javascript:alert(1)'>clique</a>",
            "<svg onload=alert(1)>",
        ]

        for xss_input in xss_inputs:
            result = sanitize_plain_text(xss_input)
            assert '<' not in result
            assert '>' not in result
            assert 'onerror' not in result.lower()

    def test_text_content_preserved(self):
        """Test text inside tags survives."""
        result = sanitize_plain_text('  <p>Apartamento <b>3 quartos</b> em Copacabana</p>  ')
        assert result == 'Apartamento 3 quartos em Copacabana'

    def test_special_characters_escaped(self):
        """Test ampersands and angle brackets are escaped."""
        assert sanitize_plain_text('preço < 500 & área > 80') == 'preço &lt; 500 &amp; área &gt; 80'

    def test_comments_removed(self):
        """Test HTML comments are removed."""
        assert sanitize_plain_text('antes<!-- escondido -->depois') == 'antesdepois'

    @pytest.mark.parametrize('value', ['', None])
    def test_empty_input(self, value):
        """Test empty input gives an empty string."""
        assert sanitize_plain_text(value) == ''


@pytest.mark.unit
class TestRichTextSanitization:
    """Test the rich text allow-list."""

    def test_allowed_tags_kept(self):
        """Test formatting tags are kept."""
        html = '<p>Casa <strong>ampla</strong> com <em>piscina</em><br/></p>'
        result = sanitize_rich_text(html)
        assert '<p>' in result
        assert '<strong>ampla</strong>' in result
        assert '<em>piscina</em>' in result
        assert '<br/>' in result

    def test_lists_kept(self):
        """Test list tags are kept."""
        html = '<ul><li>Sala</li><li>Cozinha</li></ul><ol><li>1</li></ol>'
        assert sanitize_rich_text(html) == html

    def test_disallowed_tags_unwrapped(self):
        """Test disallowed tags are unwrapped and keep their text."""
        result = sanitize_rich_text('<div><span>Vista para o mar</span></div><h1>Título</h1>')
        assert result == 'Vista para o marTítulo'

    def test_script_and_style_dropped_with_content(self):
        """Test script and style are dropped with their content."""
        result = sanitize_rich_text('<p>ok</p><script>alert(1)</script><style>p{}</style>')
        assert result == '<p>ok</p>'

    def test_only_href_and_target_kept(self):
        """Test only href and target survive on links."""
        result = sanitize_rich_text(
            '<a href="https://example.com" target="_blank" onclick="steal()" class="x">link</a>'
        )
        assert 'href="https://example.com"' in result
        assert 'target="_blank"' in result
        assert 'onclick' not in result
        assert 'class' not in result

    def test_attributes_stripped_from_other_allowed_tags(self):
        """Test attributes are stripped from other tags."""
        assert sanitize_rich_text('<p style="color:red" onmouseover="x()">texto</p>') == '<p>texto</p>'

    @pytest.mark.parametrize('href', ['javascript:alert(1)', 'JAVASCRIPT:alert(1)', ' java\tscript:alert(1)',
                                      'data:text/html;base64,PHNjcmlwdD4='])
    def test_dangerous_links_lose_href(self, href):
        """Test script and data links lose their href."""
        result = sanitize_rich_text(f'<a href="{href}">clique</a>')
        assert 'href' not in result
        assert 'clique' in result

    def test_empty_input(self):
        """Test empty input gives an empty string."""
        assert sanitize_rich_text('') == ''
        assert sanitize_rich_text(None) == ''


@pytest.mark.unit
class TestStrictSanitization:
    """Test that strict mode rejects executable content instead of dropping it."""

    def test_plain_text_script_raises(self):
        """Test a script element raises SecurityViolation."""
        with pytest.raises(SecurityViolation):
            sanitize_plain_text('<script>alert(1)</script>hello', strict=True)

    def test_plain_text_without_scripts_passes(self):
        """Test ordinary markup is still stripped in strict mode."""
        assert sanitize_plain_text('<b>Casa</b> &amp; quintal', strict=True) == 'Casa &amp; quintal'

    def test_rich_text_iframe_raises(self):
        """Test an iframe raises SecurityViolation."""
        with pytest.raises(SecurityViolation):
            sanitize_rich_text('<p>ok</p><iframe src="https://example.com"></iframe>', strict=True)

    def test_rich_text_dangerous_link_raises(self):
        """Test a javascript: link raises SecurityViolation."""
        with pytest.raises(SecurityViolation):
            sanitize_rich_text('<a href="javascript:alert(1)">clique</a>', strict=True)

    def test_lenient_mode_never_raises(self):
        """Test the default mode drops the same content silently."""
        assert sanitize_rich_text('<a href="javascript:alert(1)">clique</a>') == '<a>clique</a>'


@pytest.mark.unit
class TestFilenameSanitization:

    def test_accents_and_symbols(self):
        """Test accents and symbols are replaced."""
        result = sanitize_filename('Relatório Final (2024).PDF')
        assert re.fullmatch(r'[a-z0-9._-]+', result)
        assert result == 'relatorio_final__2024_.pdf'
        assert result.endswith('.pdf')

    def test_portuguese_characters(self):
        """Test Portuguese accents are stripped."""
        assert sanitize_filename('Fotos São João - Açaí.jpg') == 'fotos_sao_joao_-_acai.jpg'

    def test_non_latin_script(self):
        """Test non-Latin letters become underscores."""
        result = sanitize_filename('планировка.png')
        assert re.fullmatch(r'[a-z0-9._-]+', result)
        assert result.endswith('.png')

    def test_path_separators_replaced(self):
        """Test path separators cannot survive."""
        result = sanitize_filename('../../etc/passwd')
        assert '/' not in result
        assert result == '.._.._etc_passwd'

    def test_empty_input(self):
        """Test empty input gives an empty string."""
        assert sanitize_filename('') == ''
        assert sanitize_filename(None) == ''
