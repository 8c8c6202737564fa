# A small lexical scanner for the JVM descriptors found in csrg member mappings

from typing import Optional, Set, Tuple, List


class Parser:
    """
    Reads sequentially through a string, tracking a pointer.
    Used to walk JVM descriptors, where a malformed input should be reported with enough context to find it.
    """

    def __init__(self, text: str):
        self.text = text
        self.pointer = 0

    def expect(self, expected: str, error: bool = True) -> bool:
        """ Consumes the expected string, or errors (if requested) when it is not next """
        actual = self.peek(len(expected), error=False)
        if actual == expected:
            self.pointer += len(expected)
            return True
        if error:
            self.error('Expected %s, got %s' % (repr(expected), repr(actual)))
        return False

    def accept(self, option: str) -> bool:
        return self.expect(option, False)

    def accept_from(self, chars: Set[str]) -> str:
        """ Consumes the longest run of characters from the given set, possibly empty """
        start = self.pointer
        while not self.end() and self.text[self.pointer] in chars:
            self.pointer += 1
        return self.text[start:self.pointer]

    def accept_until(self, terminal: str) -> str:
        """
        Consumes characters up to and including the terminal, returning those before it.
        Errors if the terminal is never found.
        """
        index = self.text.find(terminal, self.pointer)
        if index == -1:
            self.error('Expected %s before the end of the input' % repr(terminal))
        seq = self.text[self.pointer:index]
        self.pointer = index + len(terminal)
        return seq

    def accept_method_descriptor(self) -> Tuple[str, List[str]]:
        """ Scans a method descriptor such as '(I[La;)V'. Returns the return type and the parameter types """
        self.expect('(')
        params = []
        while not self.accept(')'):
            params.append(self.accept_descriptor())
        return self.accept_descriptor(), params

    def accept_descriptor(self) -> str:
        """ Scans a single field descriptor, including any array dimensions """
        arrays = self.accept_from({'['})
        if self.accept('L'):
            name = self.accept_until(';')
            if not name:
                self.error('Empty class name in descriptor')
            return arrays + 'L' + name + ';'
        key = self.peek()
        if key not in 'BCDFIJSZV':
            self.error('Unknown descriptor type %s' % repr(key))
        self.pointer += 1
        return arrays + key

    def end(self) -> bool:
        return self.pointer >= len(self.text)

    def finish(self):
        """ Errors if there is any input left """
        if not self.end():
            self.error('Unexpected trailing characters: %s' % repr(self.peek(20, False)))

    def peek(self, length: int = 1, error: bool = True) -> str:
        if self.pointer + length > len(self.text) and error:
            self.error('Tried to peek off the end of the input')
        return self.text[self.pointer:self.pointer + length]

    def error(self, message: Optional[str] = None):
        raise ParserError(self, message)


class ParserError(RuntimeError):
    def __init__(self, parser: Parser, message: Optional[str]):
        line_start = parser.text.rfind('\n', 0, parser.pointer) + 1
        line_end = parser.text.find('\n', parser.pointer)
        if line_end == -1:
            line_end = len(parser.text)

        line = parser.text[line_start:line_end]
        col = parser.pointer - line_start
        if message is None:
            message = 'Unknown error'

        self.parser_error_message = message
        self.target_line = line
        self.target_line_no = 1 + parser.text.count('\n', 0, line_start)
        self.target_col = col

        super(ParserError, self).__init__('\n'.join([
            'Parser encountered an error',
            repr(line),
            ' ' * col + ' ^',
            message,
            '  at line %d, col %d' % (self.target_line_no, col)
        ]))
