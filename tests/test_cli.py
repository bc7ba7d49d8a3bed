import pytest

from lnd_example import cli
from tests.conftest import TLS_OPTIONS


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ('LND_TLS_CERT', 'LND_MACAROON', 'LND_SERVER'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def tls_options(monkeypatch):
    original = cli.SecureSessionBootstrapper

    def with_tls_options(**kwargs):
        return original(grpc_options=TLS_OPTIONS, **kwargs)

    monkeypatch.setattr(cli, 'SecureSessionBootstrapper', with_tls_options)


def test_defaults():
    args = cli.parse_args(['--server', 'localhost:10009'])
    assert args.tls_cert == './tls.cert'
    assert args.macaroon == './admin.macaroon'
    assert args.timeout == 10
    assert not args.grpclog


def test_server_is_required():
    with pytest.raises(SystemExit) as e:
        cli.parse_args([])
    assert e.value.code == 2


def test_server_from_environment(monkeypatch):
    monkeypatch.setenv('LND_SERVER', 'node.example.com:10009')
    args = cli.parse_args([])
    assert args.server == 'node.example.com:10009'


def test_main_prints_info(tls_options, mock_lnd, tls_cert_path,
                          macaroon_path, capsys):
    cli.main(['--server', mock_lnd.address,
              '--tls-cert', tls_cert_path,
              '--macaroon', macaroon_path])
    out = capsys.readouterr().out
    assert '"alias": "mock-lnd"' in out
    assert '"identity_pubkey": "02abab' in out


def test_main_exits_on_bad_macaroon(tmp_path, tls_cert_path):
    path = tmp_path / 'admin.macaroon'
    path.write_bytes(b'\x8f\x13\xa0')
    with pytest.raises(SystemExit) as e:
        cli.main(['--server', '127.0.0.1:10009',
                  '--tls-cert', tls_cert_path,
                  '--macaroon', str(path)])
    assert e.value.code == 1


def test_main_exits_on_closed_port(closed_port, tls_cert_path, macaroon_path):
    with pytest.raises(SystemExit) as e:
        cli.main(['--server', f'127.0.0.1:{closed_port}',
                  '--tls-cert', tls_cert_path,
                  '--macaroon', macaroon_path,
                  '--timeout', '10'])
    assert e.value.code == 1


def test_grpclog_shows_connectivity(tls_options, mock_lnd, tls_cert_path,
                                    macaroon_path, caplog):
    cli.main(['--server', mock_lnd.address,
              '--tls-cert', tls_cert_path,
              '--macaroon', macaroon_path,
              '--grpclog'])
    assert 'grpc connectivity' in caplog.text
    assert "state='READY'" in caplog.text


def test_no_connectivity_without_grpclog(tls_options, mock_lnd,
                                         tls_cert_path, macaroon_path,
                                         caplog):
    cli.main(['--server', mock_lnd.address,
              '--tls-cert', tls_cert_path,
              '--macaroon', macaroon_path])
    assert 'grpc connectivity' not in caplog.text
    assert 'dialed to LND' in caplog.text
