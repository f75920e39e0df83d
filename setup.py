from setuptools import setup


setup(name='libvirt-exporter',
      version='0.1.0',
      description='Prometheus exporter for libvirt domain metrics',
      long_description='',
      license="ASL2.0",
      py_modules=[],
      packages=['libvirt_exporter', 'libvirt_exporter.app', 'libvirt_exporter.virt'],
      python_requires='>=3.7',
      install_requires=[
          'libvirt-python',
          'prometheus_client>=0.17',
          'flask',
          'gevent',
      ],
      extras_require={
          'test': ['pytest', 'pytest-cov', 'webtest', 'freezegun'],
      },
      tests_require=['pytest', 'pytest-cov', 'webtest', 'freezegun'],
      entry_points="""
          [console_scripts]
              libvirt-exporter=libvirt_exporter.exporter:run
      """)
