import logging
from typing import Dict, List, Optional


class Mappings:
    """
    A single relation between two naming schemes, for instance obfuscated -> bukkit class names

    Names are stored in their internal '/' separated form.
    Inner classes ('Outer$Inner') do not need their own entry: resolving one will map the outermost
    known class, and keep the remaining '$' suffix as-is.
    Any '#' comment lines of the source file are kept, in order, so they can be written back out.
    """

    names: Dict[str, str]
    comments: List[str]

    def __init__(self):
        self.names = {}
        self.comments = []

    def __str__(self):
        return 'Mappings {Names=%d, Comments=%d}' % (len(self.names), len(self.comments))

    def __len__(self):
        return len(self.names)

    def __contains__(self, name: str) -> bool:
        return name in self.names

    def add(self, name: str, mapped: str):
        if name in self.names and self.names[name] != mapped:
            logging.debug('Duplicate mapping for %s: %s replaces %s' % (name, mapped, self.names[name]))
        self.names[name] = mapped

    def resolve(self, name: str) -> Optional[str]:
        """
        Maps a name, or the outermost class of a nested name.
        'Outer$Inner$1' with only 'Outer -> O' known resolves to 'O$Inner$1'.
        Prefixes are tried from the longest down, so a more specific entry always wins.
        Returns None if no prefix is known.
        """
        if name in self.names:
            return self.names[name]

        current = name
        index = current.rfind('$')
        while index != -1:
            current = current[:index]
            if current in self.names:
                return self.names[current] + name[index:]
            index = current.rfind('$')
        return None

    def remap(self, name: str) -> str:
        """ Resolves a name, leaving it unchanged if it is not known """
        mapped = self.resolve(name)
        return name if mapped is None else mapped

    def invert(self) -> 'Mappings':
        """ Creates the inverse relation. When two names map to the same value, the later one wins """
        inverse = Mappings()
        for name, mapped in self.names.items():
            inverse.add(mapped, name)
        return inverse


class Member:
    name: str
    obfuscated: str

    def __init__(self, name: str, obfuscated: str):
        self.name = name
        self.obfuscated = obfuscated


class Field(Member):
    type: str

    def __init__(self, type_: str, name: str, obfuscated: str):
        super().__init__(name, obfuscated)
        self.type = type_

    def __eq__(self, other):
        return isinstance(other, Field) and (self.type, self.name, self.obfuscated) == (other.type, other.name, other.obfuscated)

    def __repr__(self):
        return 'Field(%r, %r, %r)' % (self.type, self.name, self.obfuscated)

    def __str__(self):
        return 'field %s %s -> %s' % (self.type, self.name, self.obfuscated)


class Method(Member):
    return_type: str
    args: str

    def __init__(self, return_type: str, name: str, args: str, obfuscated: str):
        super().__init__(name, obfuscated)
        self.return_type = return_type
        self.args = args

    def __eq__(self, other):
        return isinstance(other, Method) and (self.return_type, self.name, self.args, self.obfuscated) == (other.return_type, other.name, other.args, other.obfuscated)

    def __repr__(self):
        return 'Method(%r, %r, %r, %r)' % (self.return_type, self.name, self.args, self.obfuscated)

    def __str__(self):
        return 'method %s %s(%s) -> %s' % (self.return_type, self.name, self.args, self.obfuscated)
