import sys

vi = sys.version_info
if vi < (3, 8):
    raise RuntimeError('urlspan requires Python 3.8 or greater')
else:
    import os
    import os.path
    import pathlib

    from setuptools import setup, Extension
    from setuptools.command.build_ext import build_ext as build_ext


CFLAGS = ['-O2']

ROOT = pathlib.Path(__file__).parent

CYTHON_DEPENDENCY = 'Cython>=3.0'


class urlspan_build_ext(build_ext):
    user_options = build_ext.user_options + [
        ('cython-always', None,
            'run cythonize() even if .c files are present'),
        ('cython-annotate', None,
            'Produce a colorized HTML version of the Cython source.'),
        ('cython-directives=', None,
            'Cython compiler directives, as key=value pairs'),
    ]

    boolean_options = build_ext.boolean_options + [
        'cython-always',
        'cython-annotate',
    ]

    def initialize_options(self):
        # initialize_options() may be called multiple times on the
        # same command object, so make sure not to override previously
        # set options.
        if getattr(self, '_initialized', False):
            return

        super().initialize_options()
        self.cython_always = False
        self.cython_annotate = None
        self.cython_directives = None

    def finalize_options(self):
        # finalize_options() may be called multiple times on the
        # same command object, so make sure not to override previously
        # set options.
        if getattr(self, '_initialized', False):
            return

        need_cythonize = self.cython_always

        for extension in self.distribution.ext_modules:
            for i, sfile in enumerate(extension.sources):
                if sfile.endswith('.py'):
                    prefix, ext = os.path.splitext(sfile)
                    cfile = prefix + '.c'

                    if os.path.exists(cfile) and not self.cython_always:
                        extension.sources[i] = cfile
                    else:
                        need_cythonize = True

        if need_cythonize:
            try:
                import Cython
            except ImportError:
                raise RuntimeError(
                    'please install Cython to compile urlspan from source')

            if int(Cython.__version__.split('.')[0]) < 3:
                raise RuntimeError(
                    'urlspan requires Cython version 3.0 or greater')

            from Cython.Build import cythonize

            directives = {'language_level': '3'}
            if self.cython_directives:
                for directive in self.cython_directives.split(','):
                    k, _, v = directive.partition('=')
                    if v.lower() == 'false':
                        v = False
                    if v.lower() == 'true':
                        v = True

                    directives[k] = v

            self.distribution.ext_modules[:] = cythonize(
                self.distribution.ext_modules,
                compiler_directives=directives,
                annotate=self.cython_annotate)

        super().finalize_options()

        self._initialized = True


with open(str(ROOT / 'README.md')) as f:
    long_description = f.read()


with open(str(ROOT / 'urlspan' / '_version.py')) as f:
    for line in f:
        if line.startswith('__version__ ='):
            _, _, version = line.partition('=')
            VERSION = version.strip(" \n'\"")
            break
    else:
        raise RuntimeError(
            'unable to read the version from urlspan/_version.py')


# The parser and codec are plain Python modules written in Cython's pure
# Python mode; compiling them is opt-in.
ext_modules = []
setup_requires = []

if os.environ.get('URLSPAN_BUILD_EXT') == '1' or '--cython-always' in sys.argv:
    ext_modules = [
        Extension(
            "urlspan.parser.url_parser",
            sources=[
                "urlspan/parser/url_parser.py",
            ],
            extra_compile_args=CFLAGS,
        ),
        Extension(
            "urlspan.parser.codec",
            sources=[
                "urlspan/parser/codec.py",
            ],
            extra_compile_args=CFLAGS,
        ),
    ]
    setup_requires.append(CYTHON_DEPENDENCY)


setup(
    name='urlspan',
    version=VERSION,
    description='Zero-copy URL segmenter and percent-encoding codec.',
    long_description=long_description,
    long_description_content_type='text/markdown',
    classifiers=[
        'License :: OSI Approved :: MIT License',
        'Intended Audience :: Developers',
        'Programming Language :: Python :: 3',
        'Operating System :: POSIX',
        'Operating System :: MacOS :: MacOS X',
        'Environment :: Web Environment',
        'Development Status :: 4 - Beta',
    ],
    platforms=['macOS', 'POSIX', 'Windows'],
    python_requires='>=3.8.0',
    zip_safe=False,
    license='MIT',
    packages=['urlspan', 'urlspan.parser'],
    cmdclass={
        'build_ext': urlspan_build_ext,
    },
    ext_modules=ext_modules,
    include_package_data=True,
    setup_requires=setup_requires,
    install_requires=[
        CYTHON_DEPENDENCY
    ],
    extras_require={
        'test': [
            CYTHON_DEPENDENCY
        ]
    }
)
