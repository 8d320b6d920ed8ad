"""
WebHDFS operation codes

Every request carries exactly one of these codes in its ``op`` query
parameter. The dispatcher only accepts values that resolve to a member.
"""

from enum import Enum
from typing import Union

from .exceptions import ValidationError


class Operation(str, Enum):
    """Closed set of WebHDFS operations"""
    OPEN = "OPEN"
    CREATE = "CREATE"
    APPEND = "APPEND"
    CONCAT = "CONCAT"
    RENAME = "RENAME"
    DELETE = "DELETE"
    SETPERMISSION = "SETPERMISSION"
    SETOWNER = "SETOWNER"
    SETREPLICATION = "SETREPLICATION"
    SETTIMES = "SETTIMES"
    MKDIRS = "MKDIRS"
    CREATESYMLINK = "CREATESYMLINK"
    LISTSTATUS = "LISTSTATUS"
    GETFILESTATUS = "GETFILESTATUS"
    GETCONTENTSUMMARY = "GETCONTENTSUMMARY"
    GETFILECHECKSUM = "GETFILECHECKSUM"
    GETDELEGATIONTOKEN = "GETDELEGATIONTOKEN"
    GETDELEGATIONTOKENS = "GETDELEGATIONTOKENS"
    RENEWDELEGATIONTOKEN = "RENEWDELEGATIONTOKEN"
    CANCELDELEGATIONTOKEN = "CANCELDELEGATIONTOKEN"
    
    @property
    def method(self) -> str:
        """HTTP method the namenode expects for this operation"""
        return _METHODS[self]
    
    @classmethod
    def parse(cls, value: Union["Operation", str]) -> "Operation":
        """
        Resolve an operation code.
        
        Args:
            value: Operation member or operation name (case-insensitive)
            
        Returns:
            Operation: Matching member
            
        Raises:
            ValidationError: If the code is not a known operation
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise ValidationError(f"Unknown operation code: {value!r}", details={'operation': value})


_METHODS = {
    Operation.OPEN: "GET",
    Operation.CREATE: "PUT",
    Operation.APPEND: "POST",
    Operation.CONCAT: "POST",
    Operation.RENAME: "PUT",
    Operation.DELETE: "DELETE",
    Operation.SETPERMISSION: "PUT",
    Operation.SETOWNER: "PUT",
    Operation.SETREPLICATION: "PUT",
    Operation.SETTIMES: "PUT",
    Operation.MKDIRS: "PUT",
    Operation.CREATESYMLINK: "PUT",
    Operation.LISTSTATUS: "GET",
    Operation.GETFILESTATUS: "GET",
    Operation.GETCONTENTSUMMARY: "GET",
    Operation.GETFILECHECKSUM: "GET",
    Operation.GETDELEGATIONTOKEN: "GET",
    Operation.GETDELEGATIONTOKENS: "GET",
    Operation.RENEWDELEGATIONTOKEN: "PUT",
    Operation.CANCELDELEGATIONTOKEN: "PUT",
}
