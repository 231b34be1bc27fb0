# -----------------------------------------------------------------------------
# Copyright (c) 2025--, The drivefs_trust Development Team.
#
# Distributed under the terms of the BSD 3-clause License.
#
# The full license is in the file LICENSE, distributed with this software.
# -----------------------------------------------------------------------------

from configparser import ConfigParser, Error as ConfigParserError
from os import environ, makedirs
from os.path import dirname, exists, expanduser, join

from .exceptions import ValidationError

import logging

logger = logging.getLogger(__name__)

PLACEHOLDER_TENANT = 'example.goskope.com'
PLACEHOLDER_ORG_KEY = 'abc123'
MOZILLA_CA_URL = 'https://curl.se/ca/cacert.pem'
DEFAULT_CERT_FILENAME = 'netskope-cert-bundle.pem'
DEFAULT_CERT_DIRNAME = 'Netskope Certificates'
LOG_FILENAME = 'configure-google-drive-netskope.log'
LOG_MODES = ('cli', 'file', 'both', 'none')


def user_home():
    """Home directory of the operator, even when running under sudo

    Returns
    -------
    str
        The home of SUDO_USER if set, otherwise the current user's home
    """
    sudo_user = environ.get('SUDO_USER')
    if sudo_user:
        return expanduser('~%s' % sudo_user)
    return expanduser('~')


def default_config_fp():
    """Location of the configuration file

    The DRIVEFS_TRUST_CONFIG environment variable takes precedence over
    ~/.drivefs_trust/drivefs_trust.conf
    """
    return environ.get(
        'DRIVEFS_TRUST_CONFIG',
        join(user_home(), '.drivefs_trust', 'drivefs_trust.conf'))


class TrustConfig(object):
    """Settings for a single reconciliation run

    Parameters
    ----------
    tenant_name : str
        The Netskope tenant FQDN
    org_key : str
        The Netskope organization key
    cert_dir : str
        Directory holding the certificate bundle and the log file
    cert_filename : str, optional
        Filename of the certificate bundle
    allow_insecure_ssl : bool, optional
        Whether to skip TLS verification when downloading certificates
    log_mode : str, optional
        One of 'cli', 'file', 'both' or 'none'
    public_ca_url : str, optional
        URL of the public trusted-root bundle, or 'certifi' to use the local
        certifi bundle
    timeout : float, optional
        Per request timeout, in seconds
    """
    def __init__(self, tenant_name, org_key, cert_dir,
                 cert_filename=DEFAULT_CERT_FILENAME, allow_insecure_ssl=True,
                 log_mode='both', public_ca_url=MOZILLA_CA_URL, timeout=80):
        logger.debug('Entered TrustConfig.__init__()')
        self.tenant_name = tenant_name
        self.org_key = org_key
        self.cert_dir = cert_dir
        self.cert_filename = cert_filename
        self.allow_insecure_ssl = allow_insecure_ssl
        self.log_mode = log_mode
        self.public_ca_url = public_ca_url
        self.timeout = timeout

    @property
    def cert_path(self):
        return join(self.cert_dir, self.cert_filename)

    @property
    def temp_cert_path(self):
        return self.cert_path + '.tmp'

    @property
    def log_file(self):
        return join(self.cert_dir, LOG_FILENAME)

    @property
    def file_logging(self):
        return self.log_mode in ('file', 'both')

    def validate(self):
        """Makes sure the placeholder values were replaced

        Raises
        ------
        ValidationError
            If the tenant or the org key are empty or still hold their
            placeholder values, if the log mode is unknown or if the
            timeout is not positive
        """
        logger.debug('Entered TrustConfig.validate()')
        if not self.tenant_name or not self.org_key or \
                self.tenant_name == PLACEHOLDER_TENANT or \
                self.org_key == PLACEHOLDER_ORG_KEY:
            raise ValidationError(
                "Default configuration values found! Please edit the "
                "[tenant] section of the configuration file.")
        if self.log_mode not in LOG_MODES:
            raise ValidationError(
                "valid LOG_MODE values are ['%s'], but you provided %s"
                % ("', '".join(LOG_MODES), self.log_mode))
        if not self.cert_filename:
            raise ValidationError("CERT_FILENAME can't be empty")
        if self.timeout <= 0:
            raise ValidationError(
                "TIMEOUT must be greater than 0, but you provided %s"
                % self.timeout)


def generate_config(conf_fp):
    """Writes a configuration file holding the placeholder values

    Parameters
    ----------
    conf_fp : str
        Where to write the configuration file
    """
    logger.debug('Entered generate_config(%s)' % conf_fp)
    conf_dir = dirname(conf_fp)
    if conf_dir and not exists(conf_dir):
        makedirs(conf_dir)

    with open(conf_fp, 'w') as f:
        f.write(CONF_TEMPLATE % (PLACEHOLDER_TENANT, PLACEHOLDER_ORG_KEY,
                                 MOZILLA_CA_URL, DEFAULT_CERT_FILENAME))


def load_config(conf_fp=None):
    """Reads the configuration file into a TrustConfig

    Parameters
    ----------
    conf_fp : str, optional
        The configuration file. Defaults to default_config_fp()

    Returns
    -------
    TrustConfig
        The configuration. It is not validated

    Raises
    ------
    ValidationError
        If the file does not exist, is malformed or a value can't be
        parsed
    """
    conf_fp = conf_fp if conf_fp else default_config_fp()
    logger.debug('Entered load_config(%s)' % conf_fp)
    if not exists(conf_fp):
        raise ValidationError("Configuration file not found: %s" % conf_fp)

    # values are taken literally, so a % in an org key or a path is fine
    config = ConfigParser(interpolation=None)
    try:
        with open(conf_fp) as conf_file:
            config.read_file(conf_file)

        cert_dir = config.get('bundle', 'CERT_DIR', fallback='')
        if not cert_dir:
            cert_dir = join(user_home(), DEFAULT_CERT_DIRNAME)

        return TrustConfig(
            config.get('tenant', 'TENANT_NAME', fallback=''),
            config.get('tenant', 'ORG_KEY', fallback=''),
            expanduser(cert_dir),
            cert_filename=config.get('bundle', 'CERT_FILENAME',
                                     fallback=DEFAULT_CERT_FILENAME),
            allow_insecure_ssl=config.getboolean(
                'network', 'ALLOW_INSECURE_SSL', fallback=True),
            log_mode=config.get('logging', 'LOG_MODE', fallback='both'),
            public_ca_url=config.get('network', 'PUBLIC_CA_URL',
                                     fallback=MOZILLA_CA_URL),
            timeout=config.getfloat('network', 'TIMEOUT', fallback=80))
    except (ConfigParserError, ValueError) as e:
        raise ValidationError(
            "Invalid configuration file %s: %s" % (conf_fp, str(e)))


CONF_TEMPLATE = """[tenant]
# Your Netskope tenant FQDN
TENANT_NAME = %s
# Settings > Security Cloud Platform > MDM Distribution > Organization ID
ORG_KEY = %s

[network]
# Skip TLS validation while downloading the certificates
ALLOW_INSECURE_SSL = true
TIMEOUT = 80
# Use 'certifi' to take the public bundle from the local certifi package
PUBLIC_CA_URL = %s

[bundle]
# Empty means "<home>/Netskope Certificates"
CERT_DIR =
CERT_FILENAME = %s

[logging]
# cli, file, both or none
LOG_MODE = both
"""
