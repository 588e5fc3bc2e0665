from __future__ import annotations

import io
from typing import Any

from oci.auth.signers import InstancePrincipalsSecurityTokenSigner
from oci.config import from_file
from oci.exceptions import ServiceError
from oci.object_storage import ObjectStorageClient
from oci.signer import Signer


class OCIObjectStorageClient:
    """
    Small, boto3-shaped wrapper around Oracle Cloud Infrastructure (OCI)
    Object Storage.

    It covers exactly what the object storage filesystem binding needs:
    listing with a delimiter, object metadata, ranged reads and uploads.

    Authentication modes:
      - "instance_principal":
          Uses the OCI Instance Principal of the current Compute instance.
      - "api_key":
          Uses a user-scoped OCI API key (private PEM key + config file).

    A pre-built ``client`` (and ``namespace``) may be injected instead,
    in which case no authentication is performed.
    """
    def __init__(
        self,
        *,
        region: str | None = None,
        auth_mode: str = "instance_principal",
        oci_config_file: str | None = None,
        oci_profile: str = "DEFAULT",
        client: Any | None = None,
        namespace: str | None = None,
    ) -> None:
        if client is None:
            client = self._build_client(
                region=region,
                auth_mode=auth_mode,
                oci_config_file=oci_config_file,
                oci_profile=oci_profile,
            )

        self.client = client
        self.namespace = namespace if namespace is not None else client.get_namespace().data

    @staticmethod
    def _build_client(
        *,
        region: str | None,
        auth_mode: str,
        oci_config_file: str | None,
        oci_profile: str,
    ) -> ObjectStorageClient:
        if auth_mode == "instance_principal":
            signer = InstancePrincipalsSecurityTokenSigner()
            config = {}

        elif auth_mode == "api_key":
            if oci_config_file is None:
                raise ValueError("oci_config_file is required for api_key auth")

            config = from_file(
                file_location=oci_config_file,
                profile_name=oci_profile,
            )
            signer = Signer(
                tenancy=config["tenancy"],
                user=config["user"],
                fingerprint=config["fingerprint"],
                private_key_file_location=config["key_file"],
                pass_phrase=config.get("pass_phrase"),
            )

        else:
            raise ValueError(f"Unknown auth_mode: {auth_mode}")

        client_kwargs = {}
        if region:
            client_kwargs["region"] = region

        return ObjectStorageClient(
            config=config,
            signer=signer,
            **client_kwargs,
        )

    # ------------------------------------------------------------------

    def put_object(self, bucket: str, key: str, body, content_type: str = "application/octet-stream"):
        """
        Upload an object. Returns a boto3-like dict with the object's ETag.
        """
        resp = self.client.put_object(
            namespace_name=self.namespace,
            bucket_name=bucket,
            object_name=key,
            put_object_body=body,
            content_type=content_type,
        )
        headers = getattr(resp, "headers", None) or {}
        return {"ETag": headers.get("etag")}

    def list_objects(
        self,
        bucket: str,
        prefix: str | None = None,
        delimiter: str | None = None,
        continuation_token: str | None = None,
        max_keys: int = 1000,
    ) -> dict[str, object]:
        """
        List objects in a bucket, optionally filtered by prefix.

        Returns:
          A dict with keys:
            - Contents: list of {"Key", "Size"}
            - CommonPrefixes: list of prefixes rolled up by ``delimiter``
            - IsTruncated: whether more results are available
            - NextContinuationToken: token for the next page (or None)
        """
        kwargs = {
            "namespace_name": self.namespace,
            "bucket_name": bucket,
            "limit": max_keys,
            "fields": "name,size",
        }
        if prefix:
            kwargs["prefix"] = prefix
        if delimiter:
            kwargs["delimiter"] = delimiter
        if continuation_token:
            kwargs["start"] = continuation_token

        resp = self.client.list_objects(**kwargs)
        objects = []
        for o in resp.data.objects or []:
            objects.append({"Key": o.name, "Size": getattr(o, "size", None)})

        next_token = getattr(resp.data, "next_start_with", None)
        return {
            "Contents": objects,
            "CommonPrefixes": list(getattr(resp.data, "prefixes", None) or []),
            "IsTruncated": bool(next_token),
            "NextContinuationToken": next_token,
        }

    def head_object(self, bucket: str, key: str) -> dict[str, object]:
        """
        Fetch object metadata.

        Raises FileNotFoundError when the object does not exist.
        """
        try:
            resp = self.client.head_object(
                namespace_name=self.namespace,
                bucket_name=bucket,
                object_name=key,
            )
        except ServiceError as exc:
            if exc.status == 404:
                raise FileNotFoundError(f"{bucket}/{key}") from exc
            raise

        return {"ContentLength": int(resp.headers.get("content-length", "0"))}

    def get_object(
        self,
        bucket: str,
        key: str,
        byte_range: tuple[int, int] | None = None,
    ) -> dict[str, object]:
        """
        Download an object, or the inclusive ``byte_range`` of it.

        Returns a boto3-like response where 'Body' is an io.BytesIO.
        Raises FileNotFoundError when the object does not exist.
        """
        kwargs = {
            "namespace_name": self.namespace,
            "bucket_name": bucket,
            "object_name": key,
        }
        if byte_range is not None:
            kwargs["range"] = f"bytes={byte_range[0]}-{byte_range[1]}"

        try:
            resp = self.client.get_object(**kwargs)
        except ServiceError as exc:
            if exc.status == 404:
                raise FileNotFoundError(f"{bucket}/{key}") from exc
            raise

        data_bytes = self._read_body(resp.data)

        return {
            "Body": io.BytesIO(data_bytes),
            "ContentLength": len(data_bytes),
        }

    @staticmethod
    def _read_body(d: Any) -> bytes:
        # The SDK exposes response bodies in different shapes depending on
        # transport and SDK version.
        if hasattr(d, "read") and callable(getattr(d, "read")):
            return d.read()

        if hasattr(d, "content"):
            return d.content

        if hasattr(d, "raw") and hasattr(d.raw, "read") and callable(getattr(d.raw, "read")):
            return d.raw.read()

        if hasattr(d, "raw") and hasattr(d.raw, "stream") and callable(getattr(d.raw, "stream")):
            return b"".join(d.raw.stream(1024 * 1024, decode_content=False))

        raise TypeError("Unsupported OCI get_object response type; no readable data attribute found.")
