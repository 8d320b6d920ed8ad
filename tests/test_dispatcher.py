"""
Unit tests for request dispatch and the high-level client
"""

import json
from unittest.mock import patch
from urllib.parse import parse_qs, urlsplit

import pytest
import requests

from webhdfs_sdk import WebHdfsClient, create_client
from webhdfs_sdk.config import Configuration, StatusPolicy
from webhdfs_sdk.dispatcher import RequestDescriptor, call, execute
from webhdfs_sdk.exceptions import (
    DecodeError,
    ProtocolError,
    RemoteServiceError,
    TransportError,
    ValidationError,
)
from webhdfs_sdk.operations import Operation
from webhdfs_sdk.session import WebHdfsSession

ADDR = "namenode.example.com:9870"

REMOTE_EXCEPTION = json.dumps({
    "RemoteException": {
        "exception": "FileNotFoundException",
        "message": "File does not exist: /missing",
        "javaClassName": "java.io.FileNotFoundException",
    }
})


class TestRequestDescriptor:
    """Test request descriptors"""
    
    def test_query_includes_op(self):
        descriptor = RequestDescriptor("get", "/tmp", "liststatus", {'recursive': True})
        assert descriptor.method == "GET"
        assert descriptor.operation is Operation.LISTSTATUS
        assert descriptor.query() == {'recursive': True, 'op': Operation.LISTSTATUS}
    
    def test_params_cannot_override_op(self):
        descriptor = RequestDescriptor("GET", "/tmp", Operation.GETFILESTATUS, {'op': 'DELETE'})
        assert descriptor.query()['op'] is Operation.GETFILESTATUS
    
    def test_for_operation_default_method(self):
        assert RequestDescriptor.for_operation(Operation.MKDIRS, "/tmp/new").method == "PUT"
        assert RequestDescriptor.for_operation("OPEN", "/tmp/f", method="post").method == "POST"
    
    def test_unknown_operation(self):
        with pytest.raises(ValidationError):
            RequestDescriptor("GET", "/tmp", "FORMAT")


class TestExecute:
    """Test the dispatcher against canned namenode responses"""
    
    def setup_method(self):
        self.session = WebHdfsSession(Configuration(addr=ADDR, user="alice"))
    
    def teardown_method(self):
        self.session.close()
    
    def use_policy(self, policy: StatusPolicy) -> None:
        self.session.close()
        self.session = WebHdfsSession(Configuration(addr=ADDR, user="alice", status_policy=policy))
    
    def test_success_payload(self, make_response):
        """Test a LISTSTATUS round trip"""
        payload = {"FileStatuses": {"FileStatus": [{"pathSuffix": "a", "type": "FILE"}]}}
        response = make_response(200, json.dumps(payload))
        
        with patch.object(self.session.http, 'request', return_value=response) as request:
            result = call(self.session, "GET", "tmp", Operation.LISTSTATUS)
        
        assert result == payload
        method, url = request.call_args.args
        assert method == "GET"
        parts = urlsplit(url)
        assert parts.path == "/webhdfs/v1/tmp"
        assert parse_qs(parts.query) == {'op': ["LISTSTATUS"], 'user.name': ["alice"]}
    
    def test_empty_body_success(self, make_response):
        with patch.object(self.session.http, 'request', return_value=make_response(200)):
            result = call(self.session, "PUT", "/tmp/f", Operation.SETOWNER, {'owner': 'bob'})
        
        assert result == {}
    
    def test_created_status_is_success(self, make_response):
        with patch.object(self.session.http, 'request', return_value=make_response(201)):
            assert call(self.session, "PUT", "/tmp/f", Operation.CREATE) == {}
    
    def test_json_body(self, make_response):
        descriptor = RequestDescriptor("POST", "/tmp", Operation.CONCAT, body={"sources": ["/a", "/b"]})
        with patch.object(self.session.http, 'request', return_value=make_response(200)) as request:
            execute(self.session, descriptor)
        
        assert request.call_args.kwargs['json'] == {"sources": ["/a", "/b"]}
        assert 'data' not in request.call_args.kwargs
    
    def test_raw_body(self, make_response):
        descriptor = RequestDescriptor("POST", "/tmp/f", Operation.APPEND, body=b"line\n")
        with patch.object(self.session.http, 'request', return_value=make_response(200)) as request:
            execute(self.session, descriptor)
        
        assert request.call_args.kwargs['data'] == b"line\n"
    
    def test_remote_exception_on_error_status(self, make_response):
        """Test that the decoded remote exception wins over the raw status"""
        response = make_response(404, REMOTE_EXCEPTION)
        with patch.object(self.session.http, 'request', return_value=response):
            with pytest.raises(RemoteServiceError) as exc_info:
                call(self.session, "GET", "/missing", Operation.GETFILESTATUS)
        
        assert exc_info.value.exception == "FileNotFoundException"
        assert exc_info.value.message == "File does not exist: /missing"
        assert exc_info.value.java_class_name == "java.io.FileNotFoundException"
    
    def test_500_with_remote_exception(self, make_response):
        response = make_response(500, REMOTE_EXCEPTION)
        with patch.object(self.session.http, 'request', return_value=response):
            with pytest.raises(RemoteServiceError):
                call(self.session, "GET", "/missing", Operation.GETFILESTATUS)
    
    def test_500_with_remote_exception_strict(self, make_response):
        """Test that the strict policy fails on the status before decoding"""
        self.use_policy(StatusPolicy.STRICT)
        response = make_response(500, REMOTE_EXCEPTION)
        with patch.object(self.session.http, 'request', return_value=response):
            with pytest.raises(ProtocolError) as exc_info:
                call(self.session, "GET", "/missing", Operation.GETFILESTATUS)
        
        assert exc_info.value.status_code == 500
        assert exc_info.value.reason == "Internal Server Error"
        assert "(500) Internal Server Error" in str(exc_info.value)
    
    def test_strict_success(self, make_response):
        self.use_policy(StatusPolicy.STRICT)
        response = make_response(200, '{"boolean": true}')
        with patch.object(self.session.http, 'request', return_value=response):
            assert call(self.session, "PUT", "/tmp/d", Operation.MKDIRS) == {"boolean": True}
    
    def test_error_status_without_remote_exception(self, make_response):
        """Test that a failed status is never returned as a success payload"""
        for body in ("", "{}", "<html>Not Found</html>"):
            response = make_response(404, body)
            with patch.object(self.session.http, 'request', return_value=response):
                with pytest.raises(ProtocolError) as exc_info:
                    call(self.session, "GET", "/tmp", Operation.LISTSTATUS)
            assert exc_info.value.status_code == 404
    
    def test_malformed_success_body(self, make_response):
        response = make_response(200, '{"Remote')
        with patch.object(self.session.http, 'request', return_value=response):
            with pytest.raises(DecodeError):
                call(self.session, "GET", "/tmp", Operation.LISTSTATUS)
    
    def test_transport_error(self):
        failure = requests.exceptions.ConnectTimeout("timed out")
        with patch.object(self.session.http, 'request', side_effect=failure):
            with pytest.raises(TransportError) as exc_info:
                call(self.session, "GET", "/tmp", Operation.LISTSTATUS)
        
        assert exc_info.value.__cause__ is failure
    
    def test_unknown_operation_is_not_sent(self):
        with patch.object(self.session.http, 'request') as request:
            with pytest.raises(ValidationError):
                call(self.session, "GET", "/tmp", "NOSUCHOP")
        
        request.assert_not_called()


class TestWebHdfsClient:
    """Test the high-level client"""
    
    def test_execute_uses_operation_method(self, make_response):
        with create_client(ADDR, user="alice") as client:
            with patch.object(client.session.http, 'request', return_value=make_response(200, '{"boolean": true}')) as request:
                result = client.execute(Operation.DELETE, "/tmp/old", {'recursive': True})
            
            assert result == {"boolean": True}
            method, url = request.call_args.args
            assert method == "DELETE"
            assert parse_qs(urlsplit(url).query)['recursive'] == ["true"]
    
    def test_method_override(self, make_response):
        with WebHdfsClient(Configuration(addr=ADDR, user="alice")) as client:
            with patch.object(client.session.http, 'request', return_value=make_response(200)) as request:
                client.execute("GETFILESTATUS", "/tmp", method="post")
            
            assert request.call_args.args[0] == "POST"
    
    def test_create_client_settings(self):
        client = create_client(ADDR, user="alice", enable_https=True, timeout=5.0,
                               status_policy=StatusPolicy.STRICT)
        try:
            assert client.config.enable_https
            assert client.config.timeout == (5.0, 5.0)
            assert client.config.status_policy is StatusPolicy.STRICT
            assert client.session.base_url.startswith("https://")
            assert "WebHdfsClient" in repr(client)
        finally:
            client.close()
