"""Unit tests for CircularDependencyDetector."""

import asyncio

import pytest

from modular_di.application.circular_detector import CircularDependencyDetector
from modular_di.domain import CircularDependencyError


class ServiceA:
    pass


class ServiceB:
    pass


class TestCircularDependencyDetector:
    """Test cases for the creation chain."""

    def test_push_and_pop(self):
        """Test that pop restores the previous chain."""
        detector = CircularDependencyDetector()

        token_a = detector.push(ServiceA)
        token_b = detector.push(ServiceB)
        assert detector.chain == (ServiceA, ServiceB)

        detector.pop(token_b)
        assert detector.chain == (ServiceA,)

        detector.pop(token_a)
        assert detector.chain == ()

    def test_push_twice_raises_with_cycle(self):
        """Test that re-entering a class reports the cycle."""
        detector = CircularDependencyDetector()
        detector.push(ServiceA)
        detector.push(ServiceB)

        with pytest.raises(CircularDependencyError) as exc_info:
            detector.push(ServiceA)

        assert exc_info.value.dependency_chain == [ServiceA, ServiceB, ServiceA]

    def test_self_reference(self):
        detector = CircularDependencyDetector()
        detector.push(ServiceA)

        with pytest.raises(CircularDependencyError) as exc_info:
            detector.push(ServiceA)

        assert exc_info.value.dependency_chain == [ServiceA, ServiceA]

    def test_detectors_are_independent(self):
        first = CircularDependencyDetector()
        second = CircularDependencyDetector()

        first.push(ServiceA)

        assert second.chain == ()

    @pytest.mark.asyncio
    async def test_concurrent_tasks_have_separate_chains(self):
        """Test that chains do not leak between concurrent tasks."""
        detector = CircularDependencyDetector()
        started = asyncio.Event()

        async def hold_service_a():
            token = detector.push(ServiceA)
            started.set()
            await asyncio.sleep(0.01)
            detector.pop(token)

        async def push_service_a_elsewhere():
            await started.wait()
            token = detector.push(ServiceA)
            chain = detector.chain
            detector.pop(token)
            return chain

        _, chain = await asyncio.gather(hold_service_a(), push_service_a_elsewhere())

        assert chain == (ServiceA,)
