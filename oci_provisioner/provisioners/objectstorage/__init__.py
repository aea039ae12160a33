"""Object storage resources."""

from oci_provisioner.provisioners.objectstorage.bucket import BucketOperator

__all__ = ["BucketOperator"]
