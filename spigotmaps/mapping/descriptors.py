# Builds csrg method descriptors from the java source types found in mojang mappings
# Class names are translated mojang -> obfuscated -> bukkit, and left as mojang names when either step is unknown

from typing import Optional

from spigotmaps.util import utils
from spigotmaps.util.mappings import Mappings


def translate_name(mojang: str, mojang_to_obf: Mappings, obf_to_bukkit: Mappings) -> Optional[str]:
    """ Translates a mojang class name into the bukkit name of its obfuscated class """
    obfuscated = mojang_to_obf.resolve(mojang)
    if obfuscated is None:
        return None
    return obf_to_bukkit.resolve(obfuscated)


def translate_descriptor(args: str, return_type: str, mojang_to_obf: Mappings, obf_to_bukkit: Mappings) -> str:
    """ Converts an argument list ('int,java.lang.String') and return type ('void') into a descriptor ('(ILjava/lang/String;)V') """
    params = ''.join(translate_type(arg, mojang_to_obf, obf_to_bukkit) for arg in args.split(',') if arg)
    return '(%s)%s' % (params, translate_type(return_type, mojang_to_obf, obf_to_bukkit))


def translate_type(value: str, mojang_to_obf: Mappings, obf_to_bukkit: Mappings) -> str:
    """ Converts a single java type ('int', 'boolean[]', 'net.minecraft.Util') into a descriptor element """
    if value in utils.JAVA_TYPE_TO_DESCRIPTOR:
        return utils.JAVA_TYPE_TO_DESCRIPTOR[value]
    if value.endswith('[]'):
        if value == '[]':
            return '[]'
        return '[' + translate_type(value[:-2], mojang_to_obf, obf_to_bukkit)

    name = utils.normalize_name(value)
    mapped = translate_name(name, mojang_to_obf, obf_to_bukkit)
    return 'L%s;' % (name if mapped is None else mapped)
