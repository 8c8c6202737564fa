# Creates the spigot member mappings for a BuildData checkout
# Recent BuildData only ships class mappings, the rest are derived from Mojang's official mappings

import logging
import os
from argparse import ArgumentParser
from concurrent.futures import ThreadPoolExecutor
from typing import List, NamedTuple, Optional

from spigotmaps.mapping.csrg_mapping import Mapper
from spigotmaps.util import mapping_downloader, maven
from spigotmaps.util.build_data import BuildDataInfo


class MappingsPaths(NamedTuple):
    class_mappings: str
    member_mappings: Optional[str]
    field_mappings: str
    combined_mappings: Optional[str]
    mojang_mappings: Optional[str]


def main(argv: Optional[List[str]] = None):
    """ Entry point """

    parser = ArgumentParser(description='Creates csrg member mappings for a Spigot BuildData checkout from Mojang\'s official mappings.')

    parser.add_argument('--build-data', type=str, default='build/build_data', help='The BuildData checkout, containing info.json and the mappings directory.')
    parser.add_argument('--work-dir', type=str, default='build/work', help='Where downloaded and produced mappings are written.')
    parser.add_argument('--mappings-hash', type=str, default='local', help='The BuildData mappings hash, used to name the produced files.')
    parser.add_argument('-p', '--publish', action='store_true', dest='publish', default=False, help='Install the produced mappings to the user\'s maven local.')
    parser.add_argument('--mvn', type=str, default='mvn', help='The maven executable used by --publish.')
    parser.add_argument('--log-level', type=str, default='INFO', choices=('DEBUG', 'INFO', 'WARNING', 'ERROR'), help='Logging verbosity.')

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format='%(levelname)s: %(message)s')

    info = mapping_downloader.load_build_data_info(args.build_data)
    logging.info('Loaded %s' % info)

    paths = create_mappings(info, args.build_data, args.work_dir, args.mappings_hash)

    if args.publish:
        logging.info('Publishing to maven local')
        publish_mappings(info, paths, args.mvn)

    logging.info('Done')


def create_mappings(info: BuildDataInfo, build_data_path: str, work_path: str, mappings_hash: str) -> MappingsPaths:
    """
    Writes the missing mappings for a build data version into the work directory. Existing files are reused.
    - If build data has no member mappings, they are created, including methods
    - Otherwise, field mappings are created, and combined with the build data member mappings
    Versions without mojang mappings only have their class mappings.
    """
    logging.info('Setting up mappings')
    os.makedirs(work_path, exist_ok=True)

    cm_path = os.path.join(build_data_path, mapping_downloader.BUILD_DATA_MAPPINGS, info.class_mappings)
    mm_path = mapping_downloader.member_mappings_path(build_data_path, info)
    fm_path = os.path.join(work_path, 'bukkit-%s-fields.csrg' % mappings_hash)
    comb_path = os.path.join(work_path, 'bukkit-%s-combined.csrg' % mappings_hash)

    if info.mappings_url is None:
        return MappingsPaths(cm_path, mm_path, fm_path, None, None)

    mojang_path = os.path.join(work_path, mapping_downloader.MOJANG_MAPPINGS_CACHE % info.minecraft_version)

    # The mojang mappings may need downloading, read the class mappings meanwhile
    with ThreadPoolExecutor(max_workers=2) as executor:
        mojang_future = executor.submit(mapping_downloader.load_mojang_mappings, info, work_path)
        mapper_future = executor.submit(lambda: Mapper(mapping_downloader.load_class_mappings(build_data_path, info)))
        mojang = mojang_future.result()
        mapper = mapper_future.result()

    if mm_path is None:
        mm_path = os.path.join(work_path, 'bukkit-%s-members.csrg' % mappings_hash)
        if not mapping_downloader.is_cached(mm_path):
            logging.info('Creating member mappings')
            mapping_downloader.save_text(mm_path, mapper.make_csrg(mojang, True))
        return MappingsPaths(cm_path, mm_path, fm_path, None, mojang_path)

    if not mapping_downloader.is_cached(fm_path):
        logging.info('Creating field mappings')
        mapping_downloader.save_text(fm_path, mapper.make_csrg(mojang, False))

    if not mapping_downloader.is_cached(comb_path):
        logging.info('Creating combined mappings')
        members = mapping_downloader.load_text(mm_path)
        fields = mapping_downloader.load_text(fm_path)
        mapping_downloader.save_text(comb_path, mapper.make_combined(members, fields))

    return MappingsPaths(cm_path, mm_path, fm_path, comb_path, mojang_path)


def publish_mappings(info: BuildDataInfo, paths: MappingsPaths, mvn: str = 'mvn'):
    def install(path: str, packaging: str, classifier: str):
        logging.info('Installing %s as %s' % (path, classifier))
        maven.install_file(path, packaging, classifier, info.spigot_version, mvn)

    if paths.member_mappings is not None:
        install(paths.member_mappings, 'csrg', 'maps-spigot-members')

    if paths.combined_mappings is not None:
        install(paths.field_mappings, 'csrg', 'maps-spigot-fields')
        install(paths.combined_mappings, 'csrg', 'maps-spigot')
    else:
        install(paths.class_mappings, 'csrg', 'maps-spigot')

    if paths.mojang_mappings is not None:
        install(paths.mojang_mappings, 'txt', 'maps-mojang')


if __name__ == '__main__':
    main()
