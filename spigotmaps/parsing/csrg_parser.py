# A parser for compact srg (.csrg) files, as published in Spigot's BuildData
# Class lines are 'obf mapped', field lines 'owner obf mapped', method lines 'owner obf descriptor mapped'

from typing import List, NamedTuple, Optional

from spigotmaps.util import utils
from spigotmaps.util.mappings import Mappings


class CsrgMember(NamedTuple):
    owner: str
    obfuscated: str
    desc: Optional[str]  # None for fields
    mapped: str


def parse_csrg(text: str) -> Mappings:
    """
    Parses a class mappings file into a relation of obfuscated -> mapped names.
    Any line which is not exactly two names is skipped, third party files are known to contain stray lines.
    """
    mappings = Mappings()
    for line in utils.split_lines(text):
        if line.startswith('#'):
            mappings.comments.append(line)
            continue
        parts = line.split()
        if len(parts) == 2:
            mappings.add(parts[0], parts[1])
    return mappings


def parse_csrg_members(text: str) -> List[CsrgMember]:
    """ Parses the field and method lines of a member mappings file, skipping comments and anything else """
    members = []
    for line in utils.split_lines(text):
        if line.startswith('#'):
            continue
        parts = line.split()
        if len(parts) == 3:
            owner, obfuscated, mapped = parts
            members.append(CsrgMember(owner, obfuscated, None, mapped))
        elif len(parts) == 4:
            owner, obfuscated, desc, mapped = parts
            members.append(CsrgMember(owner, obfuscated, desc, mapped))
    return members
