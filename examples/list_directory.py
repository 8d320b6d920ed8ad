#!/usr/bin/env python3
"""
WebHDFS directory listing example

Lists a directory on a namenode and prints the file names, sizes and types.
Usage: python list_directory.py namenode:9870 /tmp
"""

import logging
import sys

from webhdfs_sdk import (
    Configuration,
    Operation,
    RemoteServiceError,
    WebHdfsClient,
    WebHdfsError,
)


def main(addr: str, path: str) -> int:
    logging.basicConfig(level=logging.INFO)
    
    config = Configuration(addr=addr)
    
    try:
        with WebHdfsClient(config) as client:
            print(f"Listing {path} on {addr} as {client.config.user}")
            listing = client.execute(Operation.LISTSTATUS, path)
    except RemoteServiceError as e:
        print(f"Namenode rejected the request: {e.exception}: {e.message}")
        return 1
    except WebHdfsError as e:
        print(f"Request failed: {e}")
        return 1
    
    for status in listing.get('FileStatuses', {}).get('FileStatus', []):
        print(f"  {status.get('type', '?'):<10} {status.get('length', 0):>12}  {status.get('pathSuffix')}")
    
    return 0


if __name__ == '__main__':
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(2)
    sys.exit(main(sys.argv[1], sys.argv[2]))
