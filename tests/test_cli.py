"""
Unit tests for the webhdfs-cli command-line interface
"""

import json
from unittest.mock import patch

import pytest

from webhdfs_sdk.cli import config_from_args, create_parser, main, parse_params
from webhdfs_sdk.config import StatusPolicy
from webhdfs_sdk.exceptions import RemoteServiceError


@pytest.fixture
def mock_client():
    """Mock WebHdfsClient used by the CLI."""
    with patch('webhdfs_sdk.cli.WebHdfsClient') as client_class:
        client = client_class.return_value.__enter__.return_value
        yield client_class, client


class TestParser:
    """Test argument parsing"""
    
    def test_connection_flags(self):
        args = create_parser().parse_args([
            'call', '--addr', 'nn:9871', '--https', '--insecure', '--auth',
            '--user', 'alice', '--password', 'secret', '--strict-status',
            '--timeout', '5', 'GETFILESTATUS', '/tmp',
        ])
        config = config_from_args(args)
        
        assert config.addr == 'nn:9871'
        assert config.enable_https and config.tls_skip_verify and config.enable_auth
        assert config.user == 'alice'
        assert config.password == 'secret'
        assert config.status_policy is StatusPolicy.STRICT
        assert config.timeout == (5.0, 5.0)
    
    def test_parse_params(self):
        assert parse_params(['recursive=true', 'destination=/a=b']) == {
            'recursive': 'true',
            'destination': '/a=b',
        }
        
        with pytest.raises(ValueError, match="expected KEY=VALUE"):
            parse_params(['recursive'])


class TestMain:
    """Test CLI commands"""
    
    def test_call_prints_payload(self, mock_client, capsys):
        client_class, client = mock_client
        client.execute.return_value = {"boolean": True}
        
        exit_code = main(['call', '--addr', 'nn:9870', 'MKDIRS', '/tmp/new', '--param', 'permission=755'])
        
        assert exit_code == 0
        client.execute.assert_called_once_with('MKDIRS', '/tmp/new', {'permission': '755'}, method=None)
        assert json.loads(capsys.readouterr().out) == {"boolean": True}
        assert client_class.call_args.args[0].addr == 'nn:9870'
    
    def test_call_reports_sdk_errors(self, mock_client, capsys):
        _, client = mock_client
        client.execute.side_effect = RemoteServiceError("FileNotFoundException", "File does not exist: /x")
        
        exit_code = main(['call', '--addr', 'nn:9870', 'GETFILESTATUS', '/x'])
        
        assert exit_code == 1
        assert "FileNotFoundException: File does not exist: /x" in capsys.readouterr().err
    
    def test_invalid_param(self, mock_client, capsys):
        exit_code = main(['call', '--addr', 'nn:9870', 'LISTSTATUS', '--param', 'broken'])
        
        assert exit_code == 2
        assert "Invalid parameter" in capsys.readouterr().err
        mock_client[0].assert_not_called()
    
    def test_operations(self, capsys):
        assert main(['operations']) == 0
        output = capsys.readouterr().out
        assert "LISTSTATUS" in output
        assert "CANCELDELEGATIONTOKEN" in output
    
    def test_no_command(self, capsys):
        assert main([]) == 1
