# Loads mapping files from a BuildData checkout, and downloads (and caches) Mojang's mappings
# Cached downloads are checked against their expected hash where one is known

import hashlib
import json
import logging
import os
import urllib.error
import urllib.request

from typing import Any, Optional

from spigotmaps.util.build_data import BuildDataInfo, get_hash_from_url

USER_AGENT = 'spigotmaps/1.0'

MOJANG_MAPPINGS_CACHE = 'server.%s.txt'
BUILD_DATA_INFO = 'info.json'
BUILD_DATA_MAPPINGS = 'mappings'


def load_build_data_info(build_data_path: str) -> BuildDataInfo:
    path = os.path.join(build_data_path, BUILD_DATA_INFO)
    if not os.path.isfile(path):
        logging.info('No %s in %s, using the default layout' % (BUILD_DATA_INFO, build_data_path))
        return BuildDataInfo.default()
    return BuildDataInfo.from_json(json.loads(load_text(path)))


def load_class_mappings(build_data_path: str, info: BuildDataInfo) -> str:
    return load_text(os.path.join(build_data_path, BUILD_DATA_MAPPINGS, info.class_mappings))


def member_mappings_path(build_data_path: str, info: BuildDataInfo) -> Optional[str]:
    """ The path of the member mappings in build data, if there are any """
    if info.member_mappings is None:
        return None
    path = os.path.join(build_data_path, BUILD_DATA_MAPPINGS, info.member_mappings)
    return path if os.path.isfile(path) else None


def load_mojang_mappings(info: BuildDataInfo, work_path: str) -> Optional[str]:
    """ Loads the mojang server mappings from the work directory, downloading them first if needed """
    if info.mappings_url is None:
        return None

    path = os.path.join(work_path, MOJANG_MAPPINGS_CACHE % info.minecraft_version)
    if is_cached(path):
        return load_text(path)

    logging.info('Downloading mojang mappings for %s' % info.minecraft_version)
    expected = get_hash_from_url(info.mappings_url)
    if expected is not None:
        download_verified(info.mappings_url, path, 'sha1', expected)
        return load_text(path)

    text = as_text(download(info.mappings_url))
    save_text(path, text)
    return text


def download_verified(url: str, path: str, hash_type: str, expected: str):
    """ Ensures the file at path matches the expected hash, downloading it again if it is missing or does not """
    if is_cached(path):
        with open(path, 'rb') as f:
            if is_hash_match(hash_type, expected, f.read()):
                return
        logging.info('Cached %s does not match its %s hash, downloading again' % (path, hash_type))

    data = download(url)
    if not is_hash_match(hash_type, expected, data):
        raise ValueError('Downloaded %s does not match the expected %s hash %s' % (url, hash_type, expected))
    save_bytes(path, data)


def is_hash_match(hash_type: str, expected: str, data: bytes) -> bool:
    if hash_type not in ('md5', 'sha1', 'sha256'):
        raise ValueError('Unknown hash type %s' % repr(hash_type))
    return hashlib.new(hash_type, data).hexdigest() == expected.lower()


# Utility functions
# Writing / Reading from files, common cache functionality, etc.

def is_cached(path: str) -> bool:
    return os.path.isfile(path)


def load_text(path: str) -> str:
    try:
        with open(path, 'rb') as f:
            raw = f.read()
        return as_text(raw)
    except OSError as e:
        raise Exception('Loading %s' % repr(path)) from e


def save_text(path: str, text: str):
    save_bytes(path, text.encode('utf-8'))


def save_bytes(path: str, data: bytes):
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, 'wb') as f:
        f.write(data)


def download(url: str) -> bytes:
    request = urllib.request.Request(url, headers={'User-Agent': USER_AGENT})
    try:
        with urllib.request.urlopen(request) as response:
            res = response.read()
        return res
    except urllib.error.URLError as e:
        raise Exception('Requested %s' % url) from e


def as_text(raw: Any) -> str:
    # Mapping files are not always valid utf-8, bad bytes are replaced rather than failing the whole file
    if not isinstance(raw, str):
        raw = raw.decode('utf-8', errors='replace')
    return raw.replace('\r\n', '\n')
