# Spigot BuildData only publishes class mappings (obfuscated -> bukkit) for recent versions
# Member mappings are produced from Mojang's official mappings, using the bukkit class names

import logging
from typing import Dict, List, NamedTuple, Optional, Tuple, Union

from spigotmaps.mapping import descriptors
from spigotmaps.parsing import csrg_parser, proguard_parser
from spigotmaps.util import utils
from spigotmaps.util.mappings import Mappings, Field, Method
from spigotmaps.util.parser import ParserError


class NoActiveClass(NamedTuple):
    pass


class InClass(NamedTuple):
    name: str  # bukkit name of the class


ClassContext = Union[NoActiveClass, InClass]

NO_ACTIVE_CLASS = NoActiveClass()


class Mapper:
    """
    Creates csrg mappings from a set of bukkit class mappings.
    The class mappings are read once; a mapper can then be used any number of times.
    """

    classes: Mappings  # obfuscated -> bukkit

    def __init__(self, bukkit: str):
        self.classes = csrg_parser.parse_csrg(bukkit)
        if not self.classes:
            logging.warning('No class mappings were found in the bukkit mappings')

    @property
    def comments(self) -> List[str]:
        return self.classes.comments

    def get_bukkit_name(self, obfuscated: str) -> Optional[str]:
        return self.classes.resolve(obfuscated)

    def translate_name(self, mojang: str, mojang_to_obf: Mappings) -> Optional[str]:
        return descriptors.translate_name(mojang, mojang_to_obf, self.classes)

    def make_csrg(self, mojang: str, members: bool) -> str:
        """
        Creates the member mappings for every class that has a bukkit name.
        If members is False, only fields are included (and reserved field names are escaped).
        Otherwise, methods are included as well, with their descriptor in bukkit class names.
        """
        mojang_to_obf = proguard_parser.load_class_names(mojang) if members else Mappings()

        out = []
        context: ClassContext = NO_ACTIVE_CLASS
        headers = 0
        for line in utils.split_lines(mojang):
            if line.startswith('#'):
                continue

            if line.strip().endswith(':'):
                # any class line ends the previous class, even one which fails to parse
                context = NO_ACTIVE_CLASS
                header = proguard_parser.parse_class_header(line)
                if header is not None:
                    headers += 1
                    context = self.enter_class(header[1])
            elif isinstance(context, InClass):
                member = proguard_parser.parse_member_line(line, members)
                if member is not None:
                    out.append(self.format_member(context.name, member, mojang_to_obf))

        if headers == 0:
            logging.warning('No classes were found in the mojang mappings')

        out.sort()
        return '\n'.join(self.comments + out)

    def enter_class(self, obfuscated: str) -> ClassContext:
        bukkit = self.get_bukkit_name(obfuscated)
        return NO_ACTIVE_CLASS if bukkit is None else InClass(bukkit)

    def format_member(self, owner: str, member: Union[Field, Method], mojang_to_obf: Mappings) -> str:
        if isinstance(member, Method):
            desc = descriptors.translate_descriptor(member.args, member.return_type, mojang_to_obf, self.classes)
            return '%s %s %s %s' % (owner, member.obfuscated, desc, member.name)
        return '%s %s %s' % (owner, member.obfuscated, member.name)

    def make_combined(self, *member_mappings: str) -> str:
        """
        Merges the class mappings with any number of (bukkit keyed) member mappings, into a single obfuscated keyed file.
        Member owners and descriptors are mapped back to obfuscated names where possible.
        When the same member appears more than once, the first one wins.
        """
        bukkit_to_obf = self.classes.invert()
        records: Dict[Tuple[str, str, Optional[str]], str] = {}
        for text in member_mappings:
            for member in csrg_parser.parse_csrg_members(text):
                owner = bukkit_to_obf.remap(member.owner)
                desc = member.desc
                if desc is not None:
                    try:
                        desc = utils.remap_method_descriptor(desc, bukkit_to_obf.remap)
                    except ParserError as e:
                        logging.debug('Skipping %s %s: %s' % (member.owner, member.obfuscated, e.parser_error_message))
                        continue

                key = owner, member.obfuscated, desc
                if key in records:
                    if records[key] != member.mapped:
                        logging.debug('Conflicting mapping for %s %s: keeping %s over %s' % (owner, member.obfuscated, records[key], member.mapped))
                    continue
                records[key] = member.mapped

        out = ['%s %s' % item for item in self.classes.names.items()]
        for (owner, obfuscated, desc), mapped in records.items():
            if desc is None:
                out.append('%s %s %s' % (owner, obfuscated, mapped))
            else:
                out.append('%s %s %s %s' % (owner, obfuscated, desc, mapped))

        out.sort()
        return '\n'.join(self.comments + out)
