"""
MySQL syntax highlighter for the query editor.
"""

from PyQt6.QtCore import QRegularExpression
from PyQt6.QtGui import (
    QColor,
    QFont,
    QSyntaxHighlighter,
    QTextCharFormat,
    QTextDocument,
)

from .theme import Theme


MYSQL_KEYWORDS = {
    "SELECT", "FROM", "WHERE", "AND", "OR", "NOT", "IN", "IS", "NULL",
    "JOIN", "INNER", "LEFT", "RIGHT", "OUTER", "CROSS", "STRAIGHT_JOIN", "ON", "USING",
    "GROUP", "BY", "HAVING", "ORDER", "ASC", "DESC", "LIMIT", "OFFSET",
    "INSERT", "IGNORE", "INTO", "VALUES", "UPDATE", "SET", "DELETE", "REPLACE",
    "DUPLICATE", "KEY",
    "CREATE", "TABLE", "DATABASE", "SCHEMA", "INDEX", "VIEW", "DROP", "ALTER",
    "ADD", "COLUMN", "MODIFY", "CHANGE", "RENAME", "TO",
    "PRIMARY", "FOREIGN", "REFERENCES", "CONSTRAINT", "UNIQUE",
    "DEFAULT", "AUTO_INCREMENT", "UNSIGNED", "ENGINE", "CHARSET",
    "UNION", "ALL", "DISTINCT", "AS",
    "CASE", "WHEN", "THEN", "ELSE", "END",
    "LIKE", "REGEXP", "BETWEEN", "EXISTS",
    "WITH", "RECURSIVE", "OVER", "PARTITION", "WINDOW",
    "TRUE", "FALSE",
    "BEGIN", "START", "COMMIT", "ROLLBACK", "TRANSACTION",
    "TRUNCATE", "GRANT", "REVOKE",
    "SHOW", "DESCRIBE", "DESC", "EXPLAIN", "USE", "DATABASES", "TABLES",
    "COLUMNS", "STATUS", "VARIABLES", "PROCESSLIST",
    "CALL", "PROCEDURE", "FUNCTION", "TRIGGER", "IF",
}

MYSQL_FUNCTIONS = {
    "COUNT", "SUM", "AVG", "MIN", "MAX", "GROUP_CONCAT",
    "ABS", "ROUND", "FLOOR", "CEIL", "CEILING", "MOD", "POW", "POWER", "SQRT", "RAND",
    "COALESCE", "NULLIF", "IFNULL", "IF", "ISNULL", "GREATEST", "LEAST",
    "CAST", "CONVERT",
    "UPPER", "LOWER", "TRIM", "LTRIM", "RTRIM", "LENGTH", "CHAR_LENGTH",
    "SUBSTR", "SUBSTRING", "SUBSTRING_INDEX", "CONCAT", "CONCAT_WS", "REPLACE",
    "INSTR", "LOCATE", "LPAD", "RPAD", "REVERSE", "FORMAT",
    "DATE", "TIME", "TIMESTAMP", "YEAR", "MONTH", "DAY", "HOUR", "MINUTE", "SECOND",
    "NOW", "CURDATE", "CURTIME", "SYSDATE", "UNIX_TIMESTAMP", "FROM_UNIXTIME",
    "DATE_ADD", "DATE_SUB", "DATEDIFF", "TIMESTAMPDIFF", "DATE_FORMAT", "STR_TO_DATE",
    "ROW_NUMBER", "RANK", "DENSE_RANK", "LAG", "LEAD", "FIRST_VALUE", "LAST_VALUE",
    "JSON_EXTRACT", "JSON_OBJECT", "JSON_ARRAY", "JSON_SET", "JSON_UNQUOTE",
    "VERSION", "DATABASE", "USER", "LAST_INSERT_ID", "UUID",
}


class SQLHighlighter(QSyntaxHighlighter):
    """Highlights MySQL keywords, functions, literals and comments."""

    IN_BLOCK_COMMENT = 1

    def __init__(self, document: QTextDocument):
        super().__init__(document)
        self._build_rules()

    def _build_rules(self) -> None:
        colors = Theme.syntax()

        def fmt(color, bold=False, italic=False):
            f = QTextCharFormat()
            f.setForeground(QColor(color))
            if bold:
                f.setFontWeight(QFont.Weight.Bold)
            f.setFontItalic(italic)
            return f

        self.keyword_format = fmt(colors.keyword, bold=True)
        self.function_format = fmt(colors.function)
        self.string_format = fmt(colors.string)
        self.identifier_format = fmt(colors.identifier)
        self.comment_format = fmt(colors.comment, italic=True)
        self.number_format = fmt(colors.number)

        case_insensitive = QRegularExpression.PatternOption.CaseInsensitiveOption
        self._word_rules = [
            (QRegularExpression(r"\b\d+(\.\d+)?\b"), self.number_format),
            (QRegularExpression(r"\b(" + "|".join(sorted(MYSQL_KEYWORDS)) + r")\b",
                                case_insensitive), self.keyword_format),
            # Functions win over keywords when followed by a parenthesis
            (QRegularExpression(r"\b(" + "|".join(sorted(MYSQL_FUNCTIONS)) + r")(?=\s*\()",
                                case_insensitive), self.function_format),
        ]

    def update_theme(self) -> None:
        self._build_rules()
        self.rehighlight()

    def highlightBlock(self, text: str) -> None:
        for regex, text_format in self._word_rules:
            it = regex.globalMatch(text)
            while it.hasNext():
                match = it.next()
                self.setFormat(match.capturedStart(), match.capturedLength(), text_format)

        # Quoted spans and comments are scanned last so they override words
        self._highlight_quoted_and_comments(text)

    def _highlight_quoted_and_comments(self, text: str) -> None:
        self.setCurrentBlockState(0)
        i = 0

        if self.previousBlockState() == self.IN_BLOCK_COMMENT:
            end = text.find("*/")
            if end == -1:
                self.setFormat(0, len(text), self.comment_format)
                self.setCurrentBlockState(self.IN_BLOCK_COMMENT)
                return
            self.setFormat(0, end + 2, self.comment_format)
            i = end + 2

        while i < len(text):
            ch = text[i]
            if ch in ("'", '"', "`"):
                end = self._closing_quote(text, i)
                text_format = self.identifier_format if ch == "`" else self.string_format
                self.setFormat(i, end - i, text_format)
                i = end
            elif ch == "#" or self._line_comment_at(text, i):
                self.setFormat(i, len(text) - i, self.comment_format)
                return
            elif text.startswith("/*", i):
                end = text.find("*/", i + 2)
                if end == -1:
                    self.setFormat(i, len(text) - i, self.comment_format)
                    self.setCurrentBlockState(self.IN_BLOCK_COMMENT)
                    return
                self.setFormat(i, end + 2 - i, self.comment_format)
                i = end + 2
            else:
                i += 1

    @staticmethod
    def _line_comment_at(text: str, pos: int) -> bool:
        """MySQL needs whitespace or end of line after the double dash."""
        if not text.startswith("--", pos):
            return False
        return pos + 2 == len(text) or text[pos + 2].isspace()

    @staticmethod
    def _closing_quote(text: str, start: int) -> int:
        """Index just past the quote closing the span opened at start."""
        quote = text[start]
        i = start + 1
        while i < len(text):
            if text[i] == "\\" and quote != "`":
                i += 2
                continue
            if text[i] == quote:
                # Doubled quote is an escaped quote
                if i + 1 < len(text) and text[i + 1] == quote:
                    i += 2
                    continue
                return i + 1
            i += 1
        return len(text)
