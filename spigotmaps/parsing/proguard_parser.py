# A parser for Mojang's official mappings, which use the ProGuard mapping format
#
# net.minecraft.Util$5 -> ad$4:
#     int someField -> a
#     15:17:void tick(int,java.lang.String) -> b
#
# Class lines name the source (mojang) class and its obfuscated name.
# Member lines are indented, and may carry a 'start:end:' line number range before the type.

from typing import Optional, Tuple, Union

from spigotmaps.util import utils
from spigotmaps.util.mappings import Mappings, Field, Method

ARROW = '->'


def load_class_names(text: str) -> Mappings:
    """ Reads the class lines of a mojang mappings file into a relation of mojang -> obfuscated class names """
    mappings = Mappings()
    for line in utils.split_lines(text):
        header = parse_class_header(line)
        if header is not None:
            mappings.add(*header)
    return mappings


def parse_class_header(line: str) -> Optional[Tuple[str, str]]:
    """ Parses 'net.minecraft.Util$5 -> ad$4:' into ('net/minecraft/Util$5', 'ad$4') """
    line = line.strip()
    if not line.endswith(':'):
        return None
    parts = line.split(' -> ')
    if len(parts) < 2:
        return None
    mojang, obfuscated = parts[0], parts[1]
    if obfuscated.endswith(':'):
        obfuscated = obfuscated[:-1]
    if not obfuscated:
        return None
    return utils.normalize_name(mojang), utils.normalize_name(obfuscated)


def parse_member_line(line: str, methods: bool) -> Optional[Union[Field, Method]]:
    """
    Parses a field or method line, returning None if it was malformed or should not be remapped.

    Skipped members are:
    - Methods, if methods is False
    - Constructors and static initializers
    - Synthetic members of nested classes (the name contains a '$')
    - Members which are not renamed at all.
      When only fields are parsed, a field with a reserved name is the exception, it gets a suffix on the obfuscated name instead
    """
    parts = line.split()
    if len(parts) < 4 or parts[2] != ARROW:
        return None

    type_, name, _, obfuscated = parts[:4]
    type_ = type_[type_.rfind(':') + 1:]  # strip the line number range

    if '(' in name:
        if not methods:
            return None
        args_start = name.find('(')
        args_end = name.rfind(')')
        if args_end < args_start:
            return None
        args = name[args_start + 1:args_end]
        name = name[:args_start]
        if obfuscated in utils.CONSTRUCTOR_NAMES or '$' in name or obfuscated == name:
            return None
        return Method(type_, name, args, obfuscated)

    if '$' in name:
        return None
    if not methods and (obfuscated in utils.RESERVED_FIELD_NAMES or name in utils.RESERVED_FIELD_NAMES):
        return Field(type_, name, obfuscated + '_')
    if obfuscated == name:
        return None
    return Field(type_, name, obfuscated)
