# -----------------------------------------------------------------------------
# Copyright (c) 2025--, The drivefs_trust Development Team.
#
# Distributed under the terms of the BSD 3-clause License.
#
# The full license is in the file LICENSE, distributed with this software.
# -----------------------------------------------------------------------------

import warnings

import certifi
import requests
from urllib3.exceptions import InsecureRequestWarning

from .exceptions import FetchError

import logging

logger = logging.getLogger(__name__)

ROOT_CA_URL = 'https://addon-%s/config/ca/cert?orgkey=%s'
INTERMEDIATE_CA_URL = 'https://addon-%s/config/org/cert?orgkey=%s'
# PUBLIC_CA_URL value that reads the public bundle from the local certifi
# package instead of downloading it
CERTIFI_SOURCE = 'certifi'


class CertificateSource(object):
    """A place certificates are downloaded from

    Parameters
    ----------
    description : str
        Human readable name, used in error messages
    url : str
        The url of the certificate(s), or CERTIFI_SOURCE
    """
    def __init__(self, description, url):
        self.description = description
        self.url = url

    def __eq__(self, other):
        if type(self) is not type(other):
            return False
        return self.description == other.description and \
            self.url == other.url

    def __ne__(self, other):
        return not self.__eq__(other)

    def __repr__(self):
        return 'CertificateSource(%r, %r)' % (self.description, self.url)


def tenant_sources(tenant_name, org_key, public_ca_url):
    """The three bundle sources, in bundle order

    Parameters
    ----------
    tenant_name : str
        The Netskope tenant FQDN
    org_key : str
        The Netskope organization key
    public_ca_url : str
        The url of the public trusted-root bundle

    Returns
    -------
    list of CertificateSource
        The tenant root CA, the tenant intermediate CA and the public bundle
    """
    return [
        CertificateSource('Netskope root CA certificate',
                          ROOT_CA_URL % (tenant_name, org_key)),
        CertificateSource('Netskope intermediate CA certificate',
                          INTERMEDIATE_CA_URL % (tenant_name, org_key)),
        CertificateSource('Mozilla CA bundle', public_ca_url)]


class CertificateFetcher(object):
    """Downloads raw certificate bytes

    Parameters
    ----------
    verify : bool or str, optional
        Passed as `verify` to requests: True validates the servers against
        certifi's bundle, False skips validation, and a string is the path of
        the CA file used to validate them
    timeout : float, optional
        Per request timeout, in seconds
    session : requests.Session, optional
        The session used to issue the requests

    Notes
    -----
    There are no retries: a failed download aborts the run and the operator
    is expected to run the tool again.
    """
    def __init__(self, verify=True, timeout=80, session=None):
        self._verify = verify
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()

    def fetch(self, source):
        """Retrieves the bytes of a certificate source

        Parameters
        ----------
        source : CertificateSource
            What to download

        Returns
        -------
        bytes
            The body of the response, unmodified

        Raises
        ------
        FetchError
            If the request fails or the server does not answer with a 2xx
        """
        logger.debug('Entered CertificateFetcher.fetch(%s)' % source.url)
        if source.url == CERTIFI_SOURCE:
            return self._read_certifi(source)

        try:
            with warnings.catch_warnings():
                if self._verify is False:
                    warnings.simplefilter('ignore', InsecureRequestWarning)
                r = self._session.get(source.url, verify=self._verify,
                                      timeout=self._timeout)
        except requests.RequestException as e:
            raise FetchError(source.description, str(e))

        logger.debug('status code = %d' % r.status_code)
        if not 0 <= (r.status_code - 200) < 100:
            raise FetchError(source.description,
                             "status code %d" % r.status_code)
        return r.content

    def _read_certifi(self, source):
        ca_file = certifi.where()
        logger.debug('reading %s' % ca_file)
        try:
            with open(ca_file, 'rb') as f:
                return f.read()
        except (IOError, OSError) as e:
            raise FetchError(source.description, str(e))
