"""Configuration -- settings from a plain mapping and client selection.

Demonstrates:
- ShareSettings.from_dict() with defaults and validation
- Redacted display of the password
- Collecting every missing option in one ValidationError
- Choosing a client by scheme through the registry
"""

from __future__ import annotations

from share_transfer import OPTION_SPECS, ShareSettings, TransferManager, ValidationError, registered_schemes

if __name__ == "__main__":
    print("Options:")
    for spec in OPTION_SPECS:
        flag = "required" if spec.required else f"default {spec.default!r}"
        print(f"  {spec.name:<9} {flag:<14} {spec.description}")

    settings = ShareSettings.from_dict(
        {"hostname": "fileserver", "username": "alice", "password": "s3cret", "share": "data"}
    )
    print(f"Settings: {settings}")
    print(f"Redacted: {settings.redacted()}")

    try:
        ShareSettings.from_dict({"hostname": "fileserver"})
    except ValidationError as exc:
        print(f"Missing: {exc.fields}")

    print(f"Registered schemes: {registered_schemes()}")

    # Building the client is lazy: nothing connects until the first call
    manager = TransferManager.from_settings(settings, scheme="smb")
    print(f"Manager: {manager}")
