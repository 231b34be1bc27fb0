# -----------------------------------------------------------------------------
# Copyright (c) 2025--, The drivefs_trust Development Team.
#
# Distributed under the terms of the BSD 3-clause License.
#
# The full license is in the file LICENSE, distributed with this software.
# -----------------------------------------------------------------------------

from unittest import TestCase, main
from unittest.mock import MagicMock, patch

import certifi
import requests

from drivefs_trust.exceptions import FetchError
from drivefs_trust.fetcher import (CertificateFetcher, CertificateSource,
                                   tenant_sources, CERTIFI_SOURCE)


def _response(status_code, content=b''):
    r = MagicMock()
    r.status_code = status_code
    r.content = content
    return r


class CertificateSourceTests(TestCase):
    def test_eq_ne(self):
        obs = CertificateSource('Mozilla CA bundle', 'https://a/b.pem')
        self.assertEqual(
            obs, CertificateSource('Mozilla CA bundle', 'https://a/b.pem'))
        self.assertNotEqual(
            obs, CertificateSource('Mozilla CA bundle', 'https://a/c.pem'))
        self.assertNotEqual(obs, 'https://a/b.pem')

    def test_tenant_sources(self):
        obs = tenant_sources('acme.goskope.com', 'k3y',
                             'https://curl.se/ca/cacert.pem')
        exp = [
            CertificateSource(
                'Netskope root CA certificate',
                'https://addon-acme.goskope.com/config/ca/cert?orgkey=k3y'),
            CertificateSource(
                'Netskope intermediate CA certificate',
                'https://addon-acme.goskope.com/config/org/cert?orgkey=k3y'),
            CertificateSource('Mozilla CA bundle',
                              'https://curl.se/ca/cacert.pem')]
        self.assertEqual(obs, exp)


class CertificateFetcherTests(TestCase):
    def setUp(self):
        self.session = MagicMock()
        self.source = CertificateSource('Netskope root CA certificate',
                                        'https://addon-acme/config/ca/cert')

    def test_fetch(self):
        self.session.get.return_value = _response(200, b'PEM')
        fetcher = CertificateFetcher(verify=True, timeout=10,
                                     session=self.session)

        self.assertEqual(fetcher.fetch(self.source), b'PEM')
        self.session.get.assert_called_once_with(
            'https://addon-acme/config/ca/cert', verify=True, timeout=10)

    def test_fetch_insecure(self):
        self.session.get.return_value = _response(200, b'PEM')
        fetcher = CertificateFetcher(verify=False, session=self.session)

        fetcher.fetch(self.source)
        self.session.get.assert_called_once_with(
            'https://addon-acme/config/ca/cert', verify=False, timeout=80)

    def test_fetch_status_error(self):
        self.session.get.return_value = _response(404, b'Not Found')
        fetcher = CertificateFetcher(session=self.session)

        with self.assertRaises(FetchError) as ctx:
            fetcher.fetch(self.source)
        self.assertEqual(ctx.exception.source, 'Netskope root CA certificate')
        self.assertIn('404', str(ctx.exception))
        # no retries
        self.assertEqual(self.session.get.call_count, 1)

    def test_fetch_connection_error(self):
        self.session.get.side_effect = requests.ConnectionError('refused')
        fetcher = CertificateFetcher(session=self.session)

        with self.assertRaisesRegex(FetchError,
                                    'Netskope root CA certificate'):
            fetcher.fetch(self.source)
        self.assertEqual(self.session.get.call_count, 1)

    def test_fetch_ssl_error(self):
        self.session.get.side_effect = requests.exceptions.SSLError(
            'certificate verify failed')
        fetcher = CertificateFetcher(session=self.session)

        with self.assertRaises(FetchError):
            fetcher.fetch(self.source)

    def test_fetch_certifi(self):
        fetcher = CertificateFetcher(session=self.session)
        with open(certifi.where(), 'rb') as f:
            exp = f.read()

        obs = fetcher.fetch(CertificateSource('Mozilla CA bundle',
                                              CERTIFI_SOURCE))
        self.assertEqual(obs, exp)
        self.session.get.assert_not_called()

    @patch('drivefs_trust.fetcher.certifi.where')
    def test_fetch_certifi_missing(self, where):
        where.return_value = '/this/path/does/not/exist.pem'
        fetcher = CertificateFetcher(session=self.session)

        with self.assertRaises(FetchError):
            fetcher.fetch(CertificateSource('Mozilla CA bundle',
                                            CERTIFI_SOURCE))

    def test_default_session(self):
        fetcher = CertificateFetcher()
        self.assertIsInstance(fetcher._session, requests.Session)
        self.assertTrue(fetcher._verify)


if __name__ == '__main__':
    main()
