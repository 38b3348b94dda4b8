#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
属性注入示例

展示 PropBind 的字段标记、占位符和类型转换
"""

from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Optional

from propbind import InjectProperty, Long, Property, inject, inject_report, injectable


class Mode(Enum):
    FAST = "fast"
    SAFE = "safe"


class BaseOptions:
    """所有服务共享的选项"""
    debug: Property[bool, "debug"] = False
    region: Property[Optional[str], "region.${env}"] = None


@injectable
class ServerOptions(BaseOptions):
    """服务器选项"""
    port: Annotated[int, InjectProperty("server.${env}.port")] = 8080
    max_body: Property[Long, "server.max_body"] = 1024
    mode: Property[Mode, "mode"] = Mode.SAFE
    tls: Property[Mapping, "server.tls"] = None


if __name__ == '__main__':
    parameters = {
        "env": "prod",
        "debug": "yes",
        "region.prod": "eu-west",
        "server.prod.port": "8443",
        "server.max_body": 10_485_760,
        "mode": "TURBO",
        "server.tls": {"cert": "/etc/ssl/server.pem"},
    }

    options = ServerOptions()
    inject(options, parameters)

    print(f"✅ port={options.port} region={options.region} debug={options.debug}")
    print(f"   max_body={options.max_body} mode={options.mode} tls={options.tls}")

    # mode 的值无法匹配枚举名称，字段保持默认值
    for injector, outcome in inject_report(ServerOptions(), parameters):
        print(f"   {injector.field.name:<10} {injector.name:<22} {outcome.value}")
