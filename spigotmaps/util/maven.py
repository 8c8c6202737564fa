# Installs produced mapping files into the local maven repository, where the spigot build expects them

import logging
import os
import subprocess
from typing import List, Optional

MAVEN_OPTS = 'MAVEN_OPTS'
DEFAULT_MAVEN_OPTS = '-Xmx1024M'


def install_file_args(file_path: str, packaging: str, classifier: str, spigot_version: Optional[str]) -> List[str]:
    return [
        'install:install-file',
        '-Dfile=%s' % file_path,
        '-Dpackaging=%s' % packaging,
        '-DgroupId=org.spigotmc',
        '-DartifactId=minecraft-server',
        '-Dversion=%s' % (spigot_version if spigot_version is not None else 'null'),
        '-Dclassifier=%s' % classifier,
        '-DgeneratePom=false',
    ]


def install_file(file_path: str, packaging: str, classifier: str, spigot_version: Optional[str], mvn: str = 'mvn'):
    execute([mvn] + install_file_args(file_path, packaging, classifier, spigot_version))


def execute(args: List[str]):
    env = dict(os.environ)
    env.setdefault(MAVEN_OPTS, DEFAULT_MAVEN_OPTS)

    logging.info('Running %s' % ' '.join(args))
    proc = subprocess.Popen(args, env=env, stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
    for raw in proc.stdout:
        output = raw.decode('utf-8', errors='replace').rstrip('\r\n')
        if output != '':
            logging.info(output)
    mvn_ret_code = proc.wait()  # catch return code
    if mvn_ret_code != 0:
        raise ValueError('Maven returned error code %s' % str(mvn_ret_code))
