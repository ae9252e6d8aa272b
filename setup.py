from setuptools import setup
import os

PROJECT_ROOT, _ = os.path.split(__file__)
PROJECT_AUTHORS = 'Ken Conley'
PROJECT_EMAILS= ['kwc@willowgarage.com']
REVISION = '0.1.0'
PROJECT_NAME = 'python-jenkins-service'
PROJECT_URL='https://github.com/openstack/python-jenkins'
SHORT_DESCRIPTION = (
  'Python Jenkins Service exposes the builds, archived property files and git revisions of a Jenkins server '
  'to delivery pipelines, and triggers and stops builds with validated parameters.'
)

try:
    DESCRIPTION = open(os.path.join(PROJECT_ROOT, 'README.rst')).read()
except IOError:
    DESCRIPTION = SHORT_DESCRIPTION


def read_requirements(name):
    return [line.strip()
            for line in open(os.path.join(PROJECT_ROOT, name))
            if line.strip() and not line.startswith('#')]


setup(
    name=PROJECT_NAME.lower(),
    version=REVISION,
    author=PROJECT_AUTHORS,
    author_email=PROJECT_EMAILS,
    packages=[
        'jenkins_service'],
    zip_safe=True,
    include_package_data=False,
    install_requires=read_requirements('requirements.txt'),
    extras_require={
        'test': read_requirements('test-requirements.txt'),
    },
    python_requires='>=3.6',
    url=PROJECT_URL,
    description=SHORT_DESCRIPTION,
    long_description=DESCRIPTION,
    license='BSD',
    classifiers=[
        'Topic :: Utilities',
        'Intended Audience :: Developers',
        'Intended Audience :: Information Technology',
        'Intended Audience :: System Administrators',
        'Environment :: Console',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
    ],
)
