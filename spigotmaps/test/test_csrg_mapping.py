from unittest import TestCase

from spigotmaps.mapping import descriptors
from spigotmaps.mapping.csrg_mapping import Mapper, InClass, NO_ACTIVE_CLASS
from spigotmaps.parsing import proguard_parser
from spigotmaps.util.mappings import Mappings

BUKKIT = '# Bukkit class mappings\na Entity\nb Player\n'

MOJANG = '''# {"fileName":"server.txt"}
net.minecraft.Entity -> a:
    int health -> b
    void tick() -> c
net.minecraft.Unknown -> z:
    int x -> y
'''


class DescriptorTests(TestCase):

    def setUp(self):
        self.classes = Mappings()
        self.classes.add('a', 'Entity')
        self.classes.add('b', 'Player')
        self.mojang = proguard_parser.load_class_names('net.minecraft.Entity -> a:\nnet.minecraft.world.Player -> b:\nnet.minecraft.Missing -> q:\n')

    def translate(self, value: str) -> str:
        return descriptors.translate_type(value, self.mojang, self.classes)

    def test_primitives(self):
        self.assertEqual(self.translate('int'), 'I')
        self.assertEqual(self.translate('void'), 'V')
        self.assertEqual(self.translate('long'), 'J')
        self.assertEqual(self.translate('boolean'), 'Z')
        self.assertEqual(self.translate('byte'), 'B')

    def test_arrays(self):
        self.assertEqual(self.translate('boolean[]'), '[Z')
        self.assertEqual(self.translate('double[][]'), '[[D')
        self.assertEqual(self.translate('net.minecraft.Entity[]'), '[LEntity;')
        self.assertEqual(self.translate('[]'), '[]')

    def test_classes(self):
        self.assertEqual(self.translate('net.minecraft.Entity'), 'LEntity;')
        self.assertEqual(self.translate('net.minecraft.world.Player'), 'LPlayer;')
        self.assertEqual(self.translate('net.minecraft.Entity$Inner'), 'LEntity$Inner;')

    def test_class_fallback(self):
        self.assertEqual(self.translate('com.example.Foo'), 'Lcom/example/Foo;')
        self.assertEqual(self.translate('java.lang.String'), 'Ljava/lang/String;')
        # known to mojang, but without a bukkit name
        self.assertEqual(self.translate('net.minecraft.Missing'), 'Lnet/minecraft/Missing;')

    def test_translate_name(self):
        self.assertEqual(descriptors.translate_name('net/minecraft/Entity', self.mojang, self.classes), 'Entity')
        self.assertIsNone(descriptors.translate_name('net/minecraft/Missing', self.mojang, self.classes))
        self.assertIsNone(descriptors.translate_name('com/example/Foo', self.mojang, self.classes))

    def test_translate_descriptor(self):
        self.assertEqual(descriptors.translate_descriptor('', 'void', self.mojang, self.classes), '()V')
        self.assertEqual(descriptors.translate_descriptor('int,net.minecraft.Entity', 'boolean', self.mojang, self.classes), '(ILEntity;)Z')
        self.assertEqual(descriptors.translate_descriptor('java.lang.String[],', 'net.minecraft.world.Player', self.mojang, self.classes), '([Ljava/lang/String;)LPlayer;')


class MapperTests(TestCase):

    def test_end_to_end(self):
        output = Mapper('a Entity\nb Player').make_csrg(MOJANG, True)
        lines = output.split('\n')
        self.assertIn('Entity b health', lines)
        self.assertIn('Entity c ()V tick', lines)
        self.assertEqual(len(lines), 2)
        self.assertNotIn(' y ', output)

    def test_fields_only(self):
        output = Mapper('a Entity\nb Player').make_csrg(MOJANG, False)
        self.assertEqual(output, 'Entity b health')

    def test_comments_first(self):
        output = Mapper(BUKKIT).make_csrg(MOJANG, True)
        self.assertEqual(output, '# Bukkit class mappings\nEntity b health\nEntity c ()V tick')

    def test_sorted_and_deterministic(self):
        mojang = '''net.minecraft.world.Player -> b:
    int score -> z
    int age -> d
net.minecraft.Entity -> a:
    float speed -> x
    void move(double,double) -> m
'''
        mapper = Mapper(BUKKIT)
        output = mapper.make_csrg(mojang, True)
        self.assertEqual(output, mapper.make_csrg(mojang, True))
        self.assertEqual(output.split('\n'), [
            '# Bukkit class mappings',
            'Entity m (DD)V move',
            'Entity x speed',
            'Player d age',
            'Player z score',
        ])

    def test_descriptors_use_bukkit_names(self):
        mojang = '''net.minecraft.Entity -> a:
    net.minecraft.world.Player getOwner(net.minecraft.Entity[],int) -> e
    net.minecraft.Entity$Part getPart() -> f
net.minecraft.world.Player -> b:
'''
        output = Mapper(BUKKIT).make_csrg(mojang, True)
        self.assertIn('Entity e ([LEntity;I)LPlayer; getOwner', output)
        self.assertIn('Entity f ()LEntity$Part; getPart', output)

    def test_nested_class_headers(self):
        mojang = 'net.minecraft.Entity$Part -> a$1:\n    int size -> a\n'
        output = Mapper('a Entity').make_csrg(mojang, False)
        self.assertEqual(output, 'Entity$1 a size')

    def test_reserved_field_names(self):
        mojang = 'net.minecraft.Entity -> a:\n    int health -> do\n    int do -> a\n'
        output = Mapper('a Entity').make_csrg(mojang, False)
        self.assertEqual(output.split('\n'), ['Entity a_ do', 'Entity do_ health'])

    def test_reserved_field_names_kept_with_methods(self):
        mojang = 'net.minecraft.Entity -> a:\n    int health -> if\n    int do -> a\n'
        output = Mapper('a Entity').make_csrg(mojang, True)
        self.assertEqual(output.split('\n'), ['Entity a do', 'Entity if health'])

    def test_constructors_never_emitted(self):
        mojang = 'net.minecraft.Entity -> a:\n    1:1:void <init>() -> <init>\n    2:2:void <clinit>() -> <clinit>\n'
        mapper = Mapper('a Entity')
        self.assertEqual(mapper.make_csrg(mojang, True), '')
        self.assertEqual(mapper.make_csrg(mojang, False), '')

    def test_orphan_members_dropped(self):
        mojang = '    int health -> b\nnet.minecraft.Unknown -> z:\n    int x -> y\nnet.minecraft.Entity -> a:\n    int health -> b\n'
        self.assertEqual(Mapper('a Entity').make_csrg(mojang, False), 'Entity b health')

    def test_context_reset_by_unknown_class(self):
        mojang = 'net.minecraft.Entity -> a:\n    int health -> b\nnet.minecraft.Unknown -> z:\n    int x -> y\n'
        self.assertEqual(Mapper('a Entity').make_csrg(mojang, False), 'Entity b health')

    def test_context_reset_by_malformed_class(self):
        mojang = 'net.minecraft.Entity -> a:\n    int health -> b\nnet.minecraft.Broken:\n    int x -> y\n'
        self.assertEqual(Mapper('a Entity').make_csrg(mojang, False), 'Entity b health')

    def test_noise_tolerated(self):
        mojang = 'garbage line\nnet.minecraft.Entity -> a:\n    not a member\n    int health -> b\n\n    int -> \n'
        self.assertEqual(Mapper('a Entity\nnot a valid line at all').make_csrg(mojang, False), 'Entity b health')

    def test_empty_inputs(self):
        with self.assertLogs(level='WARNING'):
            mapper = Mapper('')
        with self.assertLogs(level='WARNING'):
            self.assertEqual(mapper.make_csrg('', True), '')

    def test_enter_class(self):
        mapper = Mapper('a Entity')
        self.assertEqual(mapper.translate_name('net/minecraft/Entity$1', proguard_parser.load_class_names('net.minecraft.Entity -> a:')), 'Entity$1')
        self.assertEqual(mapper.enter_class('a'), InClass('Entity'))
        self.assertEqual(mapper.enter_class('a$2'), InClass('Entity$2'))
        self.assertIs(mapper.enter_class('z'), NO_ACTIVE_CLASS)

    def test_make_combined(self):
        mapper = Mapper(BUKKIT)
        members = '# members\nEntity b health\nEntity c (LPlayer;[LEntity$Part;)LEntity; tick\nOther q (LOther;)V thing\n'
        fields = 'Entity b ignored\nPlayer d age\n'
        output = mapper.make_combined(members, fields)
        self.assertEqual(output.split('\n'), [
            '# Bukkit class mappings',
            'Other q (LOther;)V thing',
            'a Entity',
            'a b health',
            'a c (Lb;[La$Part;)La; tick',
            'b Player',
            'b d age',
        ])

    def test_make_combined_skips_malformed(self):
        mapper = Mapper('a Entity')
        output = mapper.make_combined('Entity c (LEntity)V broken\nEntity d (I)V fine\nEntity\n')
        self.assertEqual(output.split('\n'), ['a Entity', 'a d (I)V fine'])
