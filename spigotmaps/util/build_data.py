import re
from typing import Any, Dict, Optional, Tuple

MOJANG_OBJECT_URL = re.compile(r'https://(?:launcher|piston-data)\.mojang\.com/v1/objects/([\da-f]{40})/.*')
LEGACY_SERVER_URL = 'https://s3.amazonaws.com/Minecraft.Download/versions/{0}/minecraft_server.{0}.jar'


class BuildDataInfo:
    """
    The contents of BuildData's info.json, which names the mapping files for a single game version.
    Keys are camelCase in the json, only the minecraft version and the class mappings are always present.
    """

    minecraft_version: str
    minecraft_hash: Optional[str]
    access_transforms: Optional[str]
    class_mappings: str
    member_mappings: Optional[str]
    package_mappings: Optional[str]
    mappings_url: Optional[str]
    server_url: Optional[str]
    spigot_version: Optional[str]
    tools_version: Optional[int]
    decompile_command: Optional[str]
    class_map_command: Optional[str]
    member_map_command: Optional[str]
    final_map_command: Optional[str]

    def __init__(self, minecraft_version: str, class_mappings: str, **optional: Any):
        self.minecraft_version = minecraft_version
        self.class_mappings = class_mappings
        for key in BuildDataInfo.OPTIONAL_KEYS.values():
            setattr(self, key, optional.pop(key, None))
        if optional:
            raise ValueError('Unknown build data keys: %s' % ', '.join(sorted(optional)))

    def __str__(self):
        return 'BuildDataInfo {Version=%s, Classes=%s, Members=%s}' % (self.minecraft_version, self.class_mappings, self.member_mappings)

    @staticmethod
    def from_json(data: Dict[str, Any]) -> 'BuildDataInfo':
        try:
            minecraft_version = data['minecraftVersion']
            class_mappings = data['classMappings']
        except KeyError as e:
            raise ValueError('Build data is missing required key %s' % e) from e
        # Unknown keys are ignored, newer build data versions add more of them
        optional = dict((attr, data[key]) for key, attr in BuildDataInfo.OPTIONAL_KEYS.items() if key in data)
        return BuildDataInfo(minecraft_version, class_mappings, **optional)

    @staticmethod
    def default() -> 'BuildDataInfo':
        """ The layout used by 1.8, before info.json listed its own files """
        return BuildDataInfo('1.8', 'bukkit-1.8-cl.csrg', access_transforms='bukkit-1.8.at', member_mappings='bukkit-1.8-members.csrg', package_mappings='package.srg')

    def get_download_url(self) -> str:
        """ The url of the vanilla server jar """
        if self.server_url is not None:
            return self.server_url
        return LEGACY_SERVER_URL.format(self.minecraft_version)

    def get_server_hash(self) -> Optional[Tuple[str, str]]:
        """ The expected hash of the vanilla server jar, as (hash type, hex digest) """
        if self.server_url is not None:
            url_hash = get_hash_from_url(self.server_url)
            if url_hash is not None:
                return 'sha1', url_hash
        if self.minecraft_hash is not None:
            return 'md5', self.minecraft_hash
        return None

    OPTIONAL_KEYS = {
        'minecraftHash': 'minecraft_hash',
        'accessTransforms': 'access_transforms',
        'memberMappings': 'member_mappings',
        'packageMappings': 'package_mappings',
        'mappingsUrl': 'mappings_url',
        'serverUrl': 'server_url',
        'spigotVersion': 'spigot_version',
        'toolsVersion': 'tools_version',
        'decompileCommand': 'decompile_command',
        'classMapCommand': 'class_map_command',
        'memberMapCommand': 'member_map_command',
        'finalMapCommand': 'final_map_command',
    }


def get_hash_from_url(url: str) -> Optional[str]:
    """ Mojang object urls contain the sha1 of the object they point to """
    match = MOJANG_OBJECT_URL.search(url)
    return match.group(1) if match else None
