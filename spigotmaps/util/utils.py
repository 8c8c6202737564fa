from typing import Tuple, List, Callable

from spigotmaps.util.parser import Parser


def normalize_name(name: str) -> str:
    """ Converts a dotted java name ('net.minecraft.Util$5') into the internal form ('net/minecraft/Util$5') """
    return name.replace('.', '/')


def split_lines(text: str) -> List[str]:
    # str.splitlines() also splits on form feeds and unicode separators, which mapping files are free to contain
    lines = text.split('\n')
    return [line[:-1] if line.endswith('\r') else line for line in lines]


# Java Utilities


def remap_method_descriptor(desc: str, remap: Callable[[str], str]) -> str:
    """ Remaps a java method descriptor from one class naming scheme to another """
    ret_type, param_types = split_method_descriptor(desc)
    ret_type = _remap_descriptor_element(ret_type, remap)
    param_types = [_remap_descriptor_element(param_type, remap) for param_type in param_types]
    return '(%s)%s' % (''.join(param_types), ret_type)


def split_method_descriptor(desc: str) -> Tuple[str, List[str]]:
    """ Extracts individual elements from a java method descriptor
    Returns the return type, and a list of the parameter types
    """
    parser = Parser(desc)
    ret_type, params = parser.accept_method_descriptor()
    parser.finish()
    return ret_type, params


def _remap_descriptor_element(element: str, remap: Callable[[str], str]) -> str:
    cls = element.lstrip('[')
    if not cls.startswith('L'):
        return element
    arrays = '[' * (len(element) - len(cls))
    return arrays + 'L%s;' % remap(cls[1:-1])


# Various Java constants

JAVA_TYPE_TO_DESCRIPTOR = {
    'byte': 'B',
    'char': 'C',
    'double': 'D',
    'float': 'F',
    'int': 'I',
    'long': 'J',
    'short': 'S',
    'boolean': 'Z',
    'void': 'V'
}

# Obfuscated field names which collide with java keywords, and need a suffix to survive a source remap
RESERVED_FIELD_NAMES = {'if', 'do'}

CONSTRUCTOR_NAMES = {'<init>', '<clinit>'}
