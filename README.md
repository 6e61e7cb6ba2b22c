# nacoskit

Building blocks for clients of a service registry and configuration centre.
The package has no third-party dependencies.

## Modules

- `nacoskit.uuids`: an immutable 16-byte `UUID` value type.
  - Methods: `version()`, `variant()`, `with_version()`, `with_variant()`,
    `marshal_text()`, `marshal_binary()` and `value()`.
  - Parsing: `from_string` accepts the canonical, hash-like, braced and
    `urn:uuid:` forms. `from_bytes` takes exactly 16 raw bytes. The
    `*_or_nil` variants return `NIL` instead of raising.
  - Database values: `scan` decodes a database value, and `NullUUID` holds a
    UUID that may be NULL.
  - Comparison: `equal`.
  - Enums and constants: the `Variant` and `Domain` enums, and the namespace
    constants `NAMESPACE_DNS`, `NAMESPACE_URL`, `NAMESPACE_OID` and
    `NAMESPACE_X500`.
- `nacoskit.uuid_generator`: a `Generator` for version 1–5 UUIDs.
  - The clock, the hardware-address lookup and the random source can all be
    replaced.
  - Module-level helpers: `new_v1`, `new_v2`, `new_v3`, `new_v4` and
    `new_v5`.
  - `default_hw_addr_func` returns a 6-byte hardware address.
- `nacoskit.model`: data classes for configuration items and services.
  - Configuration: `ConfigItem`, `ConfigPage`, `ConfigListenContext` and
    `ConfigContext`.
  - Services: `Instance`, `Service`, `ServiceInfo`, `ServiceSelector`,
    `Cluster`, `ClusterHealthChecker`, `ServiceDetail`, `BeatInfo`,
    `ExpressionSelector` and `ServiceList`.
  - `Instance.from_dict` and `Service.from_dict` build objects from decoded
    JSON and check the type of each field.
- `nacoskit.params`: request parameter data classes.
  - Configuration: `ConfigParam` and `SearchConfigParam`.
  - Instances: `RegisterInstanceParam`, `BatchRegisterInstanceParam`,
    `DeregisterInstanceParam` and `UpdateInstanceParam`.
  - Services and selection: `GetServiceParam`, `GetAllServiceInfoParam`,
    `SubscribeParam`, `SelectAllInstancesParam`, `SelectInstancesParam` and
    `SelectOneHealthInstanceParam`.
- `nacoskit.util`: helper functions.
  - Digests and text: `md5`, `truncate_content` (first 100 bytes).
  - Request parameters: `transform_object_to_param`, `get_url_formed_map`.
  - JSON: `json_to_service`, `to_json_string`.
  - Host and time: `local_ip`, `current_millis`.
  - Maps and responses: `get_duration_with_default`, `get_status_code`,
    `deep_copy_map`.
- `nacoskit.semaphore`: a counting `Semaphore` with `try_acquire`, `acquire`,
  `release` and `available_permits`.
  - It can also be used as a context manager.
  - `release` waits until a permit has been taken.

## Installation

```
pip install nacoskit
```

## Examples

Parsing and generating UUIDs:

```python
from nacoskit.uuids import NAMESPACE_DNS, from_string
from nacoskit.uuid_generator import new_v4, new_v5

print(from_string("urn:uuid:6ba7b810-9dad-11d1-80b4-00c04fd430c8") == NAMESPACE_DNS)  # True
print(new_v5(NAMESPACE_DNS, "www.example.com"))  # 2ed6657d-e927-568b-95e1-2665a8aea6a2
print(new_v4().version())                        # 4
```

Digests and request parameters:

```python
from nacoskit.util import md5, transform_object_to_param
from nacoskit.params import RegisterInstanceParam

print(md5("demo"))  # fe01ce2a7fbac8fafaed7c982a04e229

param = RegisterInstanceParam(ip="10.0.0.1", port=8848, service_name="demo.go")
print(transform_object_to_param(param))
# {'ip': '10.0.0.1', 'port': '8848', 'weight': '0', 'enabled': 'false',
#  'healthy': 'false', 'serviceName': 'demo.go', 'ephemeral': 'false'}
```

`transform_object_to_param` treats fields by type:

- Empty strings, empty lists and `None` fields are left out.
- Mappings are encoded as compact JSON.
- Lists of strings are joined with commas.

Limiting concurrency with the semaphore:

```python
from nacoskit.semaphore import Semaphore

sem = Semaphore(2)
with sem:
    print(sem.available_permits())  # 1
```

## Errors

- Malformed UUID text or bytes raise `nacoskit.uuids.UUIDError`, a
  subclass of `ValueError`.
- `scan` raises `TypeError` for values that are neither bytes nor strings.
- `json_to_service` returns `None` for JSON it cannot decode.
- `to_json_string` returns an empty string for objects it cannot encode.

## What the package does not do

This package provides data types and helpers only. It does not talk to a
registry or configuration server. There is no client that registers
instances, fetches or publishes configuration, or delivers subscription
callbacks. `ConfigParam.on_change` and `SubscribeParam.subscribe_callback`
are only stored, never called. It also has no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```