import threading

import pytest
import redis

from redisrw import (
    ConfigurationError,
    ConnectionFactory,
    ConnectionPool,
    Link,
    RedisConf,
    Role,
    StoreConnectionError,
)
from redisrw.conf import EndpointConfig


@pytest.fixture
def factory(redis_conf, fake_redis):
    return ConnectionFactory(redis_conf, fake_redis)


def test_factory_create(factory, fake_redis):
    link = factory.create("cache", Role.SLAVE)
    assert isinstance(link, Link)
    assert link.store == "cache"
    assert link.role is Role.SLAVE
    assert (link.endpoint.host, link.endpoint.port) == ("h2", 6302)
    assert (link.client.host, link.client.port) == ("h2", 6302)
    # 连接超时固定用配置的值，并且建立时ping过一次
    assert link.client.kwargs["socket_connect_timeout"] == 2
    assert link.client.calls == [("ping",)]


def test_factory_no_endpoint(factory, fake_redis):
    with pytest.raises(ConfigurationError):
        factory.create("x", Role.SLAVE)
    # 没有尝试连接
    assert fake_redis.instances == []


def test_factory_timeout(factory, fake_redis):
    fake_redis.unreachable.add(("h5", 6305))
    with pytest.raises(StoreConnectionError) as exc:
        factory.create("timeout", Role.SLAVE)
    assert exc.value.endpoint.host == "h5"
    assert exc.value.role is Role.SLAVE
    assert isinstance(exc.value.__cause__, redis.exceptions.TimeoutError)
    # 也是内置ConnectionError
    assert isinstance(exc.value, ConnectionError)
    # 失败的连接要关闭
    assert fake_redis.instances[0].closed


def test_factory_random_replica(fake_redis):
    conf = RedisConf(
        {"cache": {"master": "redis://m:1", "slave": ["redis://s1:2", "redis://s2:3"]}}
    )
    factory = ConnectionFactory(conf, fake_redis)
    hosts = {factory.create("cache", Role.SLAVE).endpoint.host for _ in range(64)}
    assert hosts == {"s1", "s2"}


def test_is_alive(pool, factory):
    link = factory.create("cache", Role.MASTER)
    assert pool.is_alive(link)

    link.client.pong = "+PONG"  # 不是True都不算
    assert not pool.is_alive(link)

    link.client.pong = True
    link.client.alive = False
    assert not pool.is_alive(link)

    assert not pool.is_alive(None)

    # 类型不对
    wrong = Link("cache", Role.MASTER, EndpointConfig("h1"), object())  # type: ignore
    assert not pool.is_alive(wrong)


def test_resolve_creates_and_caches(pool, factory, fake_redis):
    link = pool.resolve("cache", Role.SLAVE, factory)
    assert link.role is Role.SLAVE
    assert ("cache", Role.SLAVE) in pool
    assert len(pool) == 1
    assert len(fake_redis.instances) == 1

    # 再次获取复用池中的连接
    assert pool.resolve("cache", Role.SLAVE, factory) is link
    assert len(fake_redis.instances) == 1


def test_resolve_prefers_master(pool, factory, fake_redis):
    slave = pool.resolve("cache", Role.SLAVE, factory)
    master = pool.resolve("cache", Role.MASTER, factory)
    assert master is not slave
    assert master.role is Role.MASTER

    # 有可用的master连接后，读也走master
    assert pool.resolve("cache", Role.SLAVE, factory) is master
    assert len(fake_redis.instances) == 2

    # master失效后，读回到slave
    master.client.alive = False
    assert pool.resolve("cache", Role.SLAVE, factory) is slave


def test_master_preference_is_per_store(pool, factory):
    master = pool.resolve("cache", Role.MASTER, factory)
    # 其他库不受影响
    other = pool.resolve("timeout", Role.SLAVE, factory)
    assert other is not master
    assert other.store == "timeout"


def test_resolve_replaces_dead_link(pool, factory, fake_redis):
    old = pool.resolve("cache", Role.SLAVE, factory)
    old.client.alive = False

    new = pool.resolve("cache", Role.SLAVE, factory)
    assert new is not old
    assert pool.get("cache", Role.SLAVE) is new
    # 旧连接不会主动关闭
    assert not old.client.closed

    old_master = pool.resolve("cache", Role.MASTER, factory)
    old_master.client.alive = False
    new_master = pool.resolve("cache", Role.MASTER, factory)
    assert new_master is not old_master
    assert pool.get("cache", Role.MASTER) is new_master


def test_resolve_failure_keeps_pool(pool, factory, fake_redis):
    fake_redis.unreachable.add(("h5", 6305))
    with pytest.raises(StoreConnectionError):
        pool.resolve("timeout", Role.SLAVE, factory)
    assert ("timeout", Role.SLAVE) not in pool
    assert len(pool) == 0

    with pytest.raises(ConfigurationError):
        pool.resolve("x", Role.SLAVE, factory)
    assert len(pool) == 0


def test_put_overwrites(pool, factory):
    first = factory.create("cache", Role.SLAVE)
    second = factory.create("cache", Role.SLAVE)
    pool.put(first)
    pool.put(second)
    assert pool.get("cache", Role.SLAVE) is second
    assert pool.keys() == [("cache", Role.SLAVE)]

    assert pool.discard("cache", Role.SLAVE) is second
    assert pool.discard("cache", Role.SLAVE) is None


def test_close_all(pool, factory):
    link = pool.resolve("cache", Role.SLAVE, factory)
    pool.close_all()
    assert len(pool) == 0
    assert link.client.closed


def test_shared_pool():
    assert ConnectionPool.shared() is ConnectionPool.shared()
    assert ConnectionPool.shared().client_cls is redis.Redis


def test_concurrent_replace_creates_once(pool, factory, fake_redis):
    """多个线程同时发现连接失效，只会建立一个新连接"""
    old = pool.resolve("cache", Role.SLAVE, factory)
    old.client.alive = False
    fake_redis.instances.clear()

    barrier = threading.Barrier(8)
    results = []

    def worker():
        barrier.wait()
        results.append(pool.resolve("cache", Role.SLAVE, factory))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(fake_redis.instances) == 1
    assert all(link is results[0] for link in results)
    assert pool.get("cache", Role.SLAVE) is results[0]


def test_factory_url_options_override(fake_redis):
    conf = RedisConf(
        {"cache": {"master": "redis://h1:6301/0?socket_timeout=0.5&socket_keepalive=true"}},
        socket_timeout=5,
    )
    link = ConnectionFactory(conf, fake_redis).create("cache", Role.MASTER)
    assert link.client.kwargs["socket_timeout"] == 0.5
    assert link.client.kwargs["socket_keepalive"] is True
    assert link.client.kwargs["socket_connect_timeout"] == 2
