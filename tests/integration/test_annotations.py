"""
Integration tests for annotation styles end to end.

Covers:
- Class, closure-built class and factory-function services
- Run-time annotations via explicit deps
- Object annotations via the factory's deps attribute
- Inline list annotations
- Incomplete annotations failing on the factory's own call
"""

import pytest

from inject import Inject, annotate


class TestFirstTimeRegistration:
    """Test each authoring style resolves against the 'logging' service"""

    def test_closure_built_class(self, container):
        """Test a class produced by a factory closure"""
        expected = '1'

        def build():
            class Fn:
                def __init__(self, log):
                    self.log = log

                def test(self):
                    return self.log['log'](expected)
            return Fn

        container.register({'token': '1', 'value': build(), 'deps': ['logging']})

        assert container.get('1').test() == expected

    def test_class_constructor(self, container):
        """Test a plain class mutating self"""
        expected = '2'

        class Fn:
            def __init__(self, log):
                self.test = log['log'](expected)

        container.register({'token': '2', 'value': Fn, 'deps': ['logging']})

        assert container.get('2').test == expected

    def test_factory_function(self, container):
        """Test a factory function annotated through its deps attribute"""
        expected = '3'

        def factory(log):
            return {'test': log['log'](expected)}

        factory.deps = ['logging']

        container.register({'token': '3', 'value': factory})

        assert container.get('3')['test'] == expected


class TestEndToEnd:
    """Test full composition roots"""

    def test_logging_service(self):
        """Test a service consuming a logging service"""
        ioc = Inject()
        ioc.register({'token': 'logging', 'value': lambda: {'log': lambda msg: msg}})
        ioc.register({'token': 'svc', 'value': lambda log: {'out': log['log']('x')}, 'deps': ['logging']})

        assert ioc.get('svc')['out'] == 'x'

    def test_independent_containers(self):
        """Test containers never share registrations or instances"""
        first = Inject()
        second = Inject()
        first.register({'token': 'a', 'value': lambda: {'id': 'first'}})
        second.register({'token': 'a', 'value': lambda: {'id': 'second'}})

        assert first.get('a')['id'] == 'first'
        assert second.get('a')['id'] == 'second'
        assert first.get('$Inject') is not second.get('$Inject')


class TestRunTimeAnnotations:
    """Test dependencies declared on the registration"""

    @pytest.fixture(autouse=True)
    def register_services(self, container):
        def service_a():
            return {'id': 'a'}

        def service_b(a):
            return {'id': a['id'] + 'b'}

        def service_c(a, b):
            return {'id': a['id'] + b['id'] + 'c'}

        container.register([
            {'token': 'serviceA', 'value': service_a},
            {'token': 'serviceB', 'value': service_b, 'deps': ['serviceA']},
            {'token': 'serviceC', 'value': service_c, 'deps': ['serviceA']},
        ])

    def test_proper_annotation(self, container):
        """Test a fully annotated service resolves"""
        assert container.get('serviceB')['id'] == 'ab'

    def test_improper_annotation(self, container):
        """Test an incomplete annotation fails on the factory call"""
        with pytest.raises(TypeError):
            container.get('serviceC')

        assert container.is_resolved('serviceA')
        assert not container.is_resolved('serviceC')


class TestObjectAnnotations:
    """Test dependencies attached to classes"""

    @pytest.fixture(autouse=True)
    def register_services(self, container):
        class ServiceA:
            def __init__(self):
                self.id = 'a'

        class ServiceB:
            deps = ['ServiceA']

            def __init__(self, service_a):
                self.id = service_a.id + 'b'

        @annotate('ServiceA')
        class ServiceC:
            def __init__(self, service_a, service_b):
                self.id = service_a.id + service_b.id + 'c'

        container.register([
            {'token': 'ServiceA', 'value': ServiceA},
            {'token': 'ServiceB', 'value': ServiceB},
            {'token': 'ServiceC', 'value': ServiceC},
        ])

    def test_proper_annotation(self, container):
        """Test a class with a complete deps attribute"""
        assert container.get('ServiceB').id == 'ab'

    def test_improper_annotation(self, container):
        """Test a class missing a dependency in its annotation"""
        with pytest.raises(TypeError):
            container.get('ServiceC')


class TestInlineAnnotations:
    """Test inline list annotations"""

    def test_inline_chain(self, container):
        """Test services chained through inline annotations"""
        container.register([
            {'token': 'greeter', 'value': ['logging', lambda log: {'greet': lambda name: log['log'](f'hello {name}')}]},
            {'token': 'app', 'value': ('greeter', '$Inject', lambda greeter, ioc: {'greeting': greeter['greet']('ioc'), 'ioc': ioc})},
        ])

        app = container.get('app')

        assert app['greeting'] == 'hello ioc'
        assert app['ioc'] is container
